"""
knowledge_base.core - In-memory entity storage and topic graph engine

This package provides the generic entity store, the topic hierarchy/path
queries and the topic version history, without any dependency on HTTP,
password hashing or tokens.

Main components:
- EntityStore: Generic keyed collection with CRUD, pagination and counting
- TopicGraph: Hierarchy trees and shortest paths over a live topic mapping
- VersionLedger: Append-only per-topic content history
- Models: Topic, User, Resource and the snapshot/tree types

Usage:
    from knowledge_base.core import EntityStore, TopicGraph, Topic

    store = EntityStore(factory=lambda data: Topic(**data),
                        updater=lambda topic, data: topic)
    root = store.create({"name": "Python", "content": "..."})
    graph = TopicGraph(store.items)
    trees = graph.build_hierarchy()
"""

from .storage import EntityStore
from .topic_graph import TopicGraph
from .versions import VersionLedger

from .models import (
    Entity,
    Topic,
    TopicVersion,
    TopicNode,
    User,
    UserRole,
    Resource,
    ResourceType,
)

from .errors import (
    KnowledgeBaseError,
    ValidationFailure,
    NotFound,
    AuthenticationError,
)

__all__ = [
    "EntityStore",
    "TopicGraph",
    "VersionLedger",

    # Models
    "Entity",
    "Topic",
    "TopicVersion",
    "TopicNode",
    "User",
    "UserRole",
    "Resource",
    "ResourceType",

    # Errors
    "KnowledgeBaseError",
    "ValidationFailure",
    "NotFound",
    "AuthenticationError",
]

__version__ = "1.0.0"
