"""
TopicRepository - topic storage with hierarchy, paths and version history.

Composes an EntityStore[Topic], a TopicGraph reading the store's live
mapping, and a VersionLedger. Content-changing updates snapshot the
pre-update topic into the ledger before the new content is applied.
"""

import logging
from typing import Any, List, Mapping, Optional

from knowledge_base.core import (
    EntityStore, TopicGraph, VersionLedger,
    Topic, TopicNode, TopicVersion, ValidationFailure,
)

logger = logging.getLogger(__name__)


class TopicRepository:
    """
    Topic-specific service contract.

    Offers the generic store operations (create, find_by_id, find_all,
    update, delete, count) plus get_hierarchy, find_path, get_versions and
    get_version.
    """

    def __init__(self):
        self._versions = VersionLedger()
        self._store: EntityStore[Topic] = EntityStore(
            factory=self._create_topic,
            updater=self._update_topic,
            name="topics",
        )
        self._graph = TopicGraph(self._store.items)

    @property
    def store(self) -> EntityStore[Topic]:
        return self._store

    # ==================== Store hooks ====================

    @staticmethod
    def _create_topic(data: Mapping[str, Any]) -> Topic:
        name = data.get("name")
        content = data.get("content")
        if not isinstance(name, str) or not name.strip():
            raise ValidationFailure("Topic name is required")
        if not isinstance(content, str):
            raise ValidationFailure("Topic content must be a string")

        parent_topic_id = data.get("parent_topic_id")
        if parent_topic_id is not None and not isinstance(parent_topic_id, str):
            raise ValidationFailure("parent_topic_id must be a string")

        return Topic(name=name, content=content, parent_topic_id=parent_topic_id or None)

    def _update_topic(self, topic: Topic, data: Mapping[str, Any]) -> Topic:
        content = data.get("content")
        if content is not None and not isinstance(content, str):
            raise ValidationFailure("Topic content must be a string")

        name = data.get("name")
        if name is not None and not isinstance(name, str):
            raise ValidationFailure("Topic name must be a string")

        parent_topic_id = data.get("parent_topic_id")
        if parent_topic_id is not None and not isinstance(parent_topic_id, str):
            raise ValidationFailure("parent_topic_id must be a string")

        # Fixed order: content, then name, then parent
        if content:
            self._versions.record_snapshot(topic)
            topic.update_content(content)

        if name:
            topic.update_name(name)

        # An explicit None clears the parent; an absent key leaves it alone
        if "parent_topic_id" in data:
            topic.set_parent_topic(parent_topic_id or None)

        return topic

    # ==================== Generic contract ====================

    def create(self, data: Mapping[str, Any]) -> Topic:
        topic = self._store.create(data)
        logger.info(f"Created topic {topic.id} '{topic.name}'")
        return topic

    def find_by_id(self, topic_id: str) -> Optional[Topic]:
        return self._store.find_by_id(topic_id)

    def find_all(self, skip: int = 0, limit: int = 10) -> List[Topic]:
        return self._store.find_all(skip, limit)

    def update(self, topic_id: str, data: Mapping[str, Any]) -> Optional[Topic]:
        return self._store.update(topic_id, data)

    def delete(self, topic_id: str) -> bool:
        return self._store.delete(topic_id)

    def count(self) -> int:
        return self._store.count()

    # ==================== Topic-specific operations ====================

    def find_children(self, topic_id: str) -> List[Topic]:
        """Direct children of a topic, in collection order."""
        return self._store.find(lambda topic: topic.parent_topic_id == topic_id)

    def get_hierarchy(self, root_topic_id: Optional[str] = None) -> List[TopicNode]:
        with self._store.lock:
            return self._graph.build_hierarchy(root_topic_id)

    def find_path(self, start_topic_id: str, end_topic_id: str) -> List[Topic]:
        with self._store.lock:
            return self._graph.find_shortest_path(start_topic_id, end_topic_id)

    def get_versions(self, topic_id: str) -> List[TopicVersion]:
        return self._versions.list_versions(topic_id)

    def get_version(self, topic_id: str, version: int) -> Optional[TopicVersion]:
        return self._versions.get_version(topic_id, version)
