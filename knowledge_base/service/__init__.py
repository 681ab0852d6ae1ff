"""
knowledge_base.service - Repositories, auth and REST surface

This package builds the per-entity repositories on top of knowledge_base.core
and exposes them over HTTP.

Main components:
- TopicRepository: Topics with hierarchy, shortest paths and version history
- UserRepository / ResourceRepository: Users and learning resources
- AuthService: Login, JWT access tokens and refresh-token rotation
- create_rest_router: FastAPI router over all of the above

Usage:
    from knowledge_base.service import TopicRepository

    topics = TopicRepository()
    root = topics.create({"name": "Python", "content": "A language"})
    child = topics.create({"name": "Typing", "content": "...", "parent_topic_id": root.id})
    topics.find_path(child.id, root.id)
"""

from .topics import TopicRepository
from .users import UserRepository
from .resources import ResourceRepository
from .security import PasswordHasher
from .auth import AuthService, AuthSettings, AuthResult, TokenPayload
from .seed import seed_default_users
from .rest_api import create_rest_router
from .serializers import json_serializer, serialize_to_json

__all__ = [
    "TopicRepository",
    "UserRepository",
    "ResourceRepository",
    "PasswordHasher",
    "AuthService",
    "AuthSettings",
    "AuthResult",
    "TokenPayload",
    "seed_default_users",
    "create_rest_router",
    "json_serializer",
    "serialize_to_json",
]
