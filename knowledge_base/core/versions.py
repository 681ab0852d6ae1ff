"""
Append-only version history for topics.

Snapshots are recorded before a content change is applied, so version N of a
topic holds the content it had just before its Nth content change. Snapshots
are never modified or removed and live as long as the ledger.
"""

import logging
import threading
from typing import Dict, List, Optional

from .models import Topic, TopicVersion

logger = logging.getLogger(__name__)


class VersionLedger:
    """Per-topic ordered sequence of TopicVersion snapshots."""

    def __init__(self):
        self._lock = threading.RLock()
        self._versions: Dict[str, List[TopicVersion]] = {}

    def record_snapshot(self, topic: Topic) -> TopicVersion:
        """Capture the topic's current fields and append them to its history."""
        snapshot = TopicVersion.capture(topic)
        with self._lock:
            history = self._versions.setdefault(topic.id, [])
            history.append(snapshot)
            logger.info(f"Recorded version {len(history)} of topic {topic.id}")
        return snapshot

    def list_versions(self, topic_id: str) -> List[TopicVersion]:
        """Full history for a topic, oldest first; empty if none recorded."""
        with self._lock:
            return list(self._versions.get(topic_id, []))

    def get_version(self, topic_id: str, number: int) -> Optional[TopicVersion]:
        """
        Return the 1-indexed snapshot `number` of a topic.

        Returns None when number is outside [1, len(history)].
        """
        with self._lock:
            history = self._versions.get(topic_id, [])
            if number < 1 or number > len(history):
                return None
            return history[number - 1]
