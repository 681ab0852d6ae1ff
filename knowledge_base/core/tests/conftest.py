"""
Pytest fixtures for knowledge_base.core tests.

Provides:
- A topic EntityStore with simple factory/updater hooks
- A TopicGraph reading that store
- A three-level chain of topics (A <- B <- C)
"""

import pytest

from knowledge_base.core import EntityStore, Topic, TopicGraph


def _make_topic(data):
    return Topic(
        name=data["name"],
        content=data.get("content", ""),
        parent_topic_id=data.get("parent_topic_id"),
    )


def _update_topic(topic, data):
    if "content" in data:
        topic.update_content(data["content"])
    if "name" in data:
        topic.update_name(data["name"])
    if "parent_topic_id" in data:
        topic.set_parent_topic(data["parent_topic_id"])
    return topic


@pytest.fixture
def topic_store() -> EntityStore:
    """An empty topic store."""
    return EntityStore(factory=_make_topic, updater=_update_topic, name="test-topics")


@pytest.fixture
def topic_graph(topic_store) -> TopicGraph:
    """A TopicGraph borrowing the topic store's live mapping."""
    return TopicGraph(topic_store.items)


@pytest.fixture
def chain(topic_store):
    """Topics A (root), B (parent=A), C (parent=B)."""
    a = topic_store.create({"name": "A"})
    b = topic_store.create({"name": "B", "parent_topic_id": a.id})
    c = topic_store.create({"name": "C", "parent_topic_id": b.id})
    return a, b, c
