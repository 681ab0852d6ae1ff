"""
Data models for the knowledge base.

Defines the entity kinds held by the in-memory stores (topics, users,
resources), the immutable topic version snapshot, and the tree node used
for topic hierarchies.

This module is part of the core layer and has no HTTP or auth dependencies.
"""

from enum import Enum
from typing import Optional, List, Any
from datetime import datetime
from pydantic import BaseModel, Field, validator
import uuid


class UserRole(str, Enum):
    """Roles a user can hold."""
    ADMIN = "Admin"
    EDITOR = "Editor"
    VIEWER = "Viewer"

    @classmethod
    def normalize(cls, value: Any) -> "UserRole":
        """
        Convert a role name in any casing ("admin", "ADMIN") to a UserRole.

        Raises:
            ValueError: If the value is not a known role
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value:
            normalized = value[:1].upper() + value[1:].lower()
            try:
                return cls(normalized)
            except ValueError:
                pass
        raise ValueError("Invalid role. Role must be one of: Admin, Editor, Viewer")


class ResourceType(str, Enum):
    """Kinds of learning resources attached to topics."""
    VIDEO = "video"
    ARTICLE = "article"
    PDF = "pdf"


class Entity(BaseModel):
    """Base model for every stored record"""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    def touch(self) -> None:
        """Refresh the last-modified timestamp."""
        self.updated_at = datetime.utcnow()


class Topic(Entity):
    """A knowledge topic, optionally nested under a parent topic"""
    name: str
    content: str
    version: int = 1
    parent_topic_id: Optional[str] = None

    def update_content(self, content: str) -> None:
        self.content = content
        self.version += 1
        self.touch()

    def update_name(self, name: str) -> None:
        self.name = name
        self.touch()

    def set_parent_topic(self, parent_topic_id: Optional[str]) -> None:
        self.parent_topic_id = parent_topic_id
        self.touch()


class TopicVersion(BaseModel):
    """
    Immutable copy of a topic's fields captured before a content change.

    original_topic_id tags the snapshot with the topic it belongs to.
    """
    id: str
    created_at: datetime
    updated_at: datetime
    name: str
    content: str
    version: int
    parent_topic_id: Optional[str] = None
    original_topic_id: str

    class Config:
        frozen = True

    @classmethod
    def capture(cls, topic: Topic) -> "TopicVersion":
        """Snapshot the current field values of a topic."""
        return cls(**topic.model_dump(), original_topic_id=topic.id)


class TopicNode(BaseModel):
    """A topic paired with the trees of its direct children"""
    topic: Topic
    children: List["TopicNode"] = Field(default_factory=list)


TopicNode.model_rebuild()


class User(Entity):
    """An account that can authenticate against the API"""
    name: str
    email: str
    role: UserRole = UserRole.VIEWER
    # Never included in model_dump() output
    password_hash: Optional[str] = Field(default=None, exclude=True)

    @validator('role', pre=True)
    def validate_role(cls, v):
        """Accept role names in any casing."""
        return UserRole.normalize(v)

    def update_profile(self, name: str, email: str) -> None:
        self.name = name
        self.email = email
        self.touch()

    def update_role(self, role: UserRole) -> None:
        self.role = role
        self.touch()

    def set_password_hash(self, password_hash: str) -> None:
        self.password_hash = password_hash
        self.touch()


class Resource(Entity):
    """A link to external material (video, article, pdf) about a topic"""
    topic_id: str
    url: str
    description: str
    type: ResourceType

    def update_details(self, url: str, description: str, type: ResourceType) -> None:
        self.url = url
        self.description = description
        self.type = type
        self.touch()

    def update_topic(self, topic_id: str) -> None:
        self.topic_id = topic_id
        self.touch()
