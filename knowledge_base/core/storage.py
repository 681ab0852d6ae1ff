"""
Generic in-memory entity storage.

EntityStore keeps any Entity subtype in an insertion-ordered dict and gives
CRUD, pagination and counting over it. Construction of new entities and
merging of partial updates are delegated to a factory/updater pair supplied
by the caller, so one store class serves topics, users and resources alike.

Concurrency Safety:
- Every public method runs under a threading.RLock (single writer at a time)
- The lock is reentrant so factories/updaters may call back into the store
  (e.g. an email uniqueness check inside the user factory)

Aliasing contract:
- `items` is the live dict backing the store, not a copy. Readers such as
  TopicGraph hold on to it and see every later mutation without
  resynchronisation. Callers must not mutate it directly.
"""

import logging
import threading
from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, TypeVar

from .models import Entity

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Entity)

# factory(data) -> new entity; may raise ValidationFailure
EntityFactory = Callable[[Mapping[str, Any]], T]
# updater(entity, data) -> merged entity; may raise ValidationFailure
EntityUpdater = Callable[[T, Mapping[str, Any]], T]


class EntityStore(Generic[T]):
    """
    Keyed, volatile collection for one entity kind.

    Failures raised by the factory or updater propagate unchanged and leave
    the store exactly as it was before the call.
    """

    def __init__(
        self,
        factory: EntityFactory,
        updater: EntityUpdater,
        name: str = "entities",
    ):
        """
        Args:
            factory: Builds a new entity from caller-supplied fields
            updater: Applies a partial update to an entity and returns it
            name: Label used in log messages
        """
        self.name = name
        self._factory = factory
        self._updater = updater
        self._lock = threading.RLock()
        self._items: Dict[str, T] = {}

    @property
    def items(self) -> Dict[str, T]:
        """The live id -> entity mapping (see module docstring)."""
        return self._items

    @property
    def lock(self) -> threading.RLock:
        """Lock guarding the collection, for callers composing several reads."""
        return self._lock

    def create(self, data: Mapping[str, Any]) -> T:
        """Build, stamp and insert a new entity."""
        with self._lock:
            entity = self._factory(data)
            now = datetime.utcnow()
            entity.created_at = now
            entity.updated_at = now
            self._items[entity.id] = entity
            logger.debug(f"{self.name}: created {entity.id}")
            return entity

    def find_by_id(self, entity_id: str) -> Optional[T]:
        with self._lock:
            return self._items.get(entity_id)

    def find_all(self, skip: int = 0, limit: int = 10) -> List[T]:
        """
        Return entities in insertion order, windowed by skip/limit.

        Windows past the end give a partial or empty list, never an error.
        """
        skip = max(skip, 0)
        limit = max(limit, 0)
        with self._lock:
            return list(self._items.values())[skip:skip + limit]

    def find(self, predicate: Callable[[T], bool]) -> List[T]:
        """Return all entities matching predicate, in insertion order."""
        with self._lock:
            return [entity for entity in self._items.values() if predicate(entity)]

    def update(self, entity_id: str, data: Mapping[str, Any]) -> Optional[T]:
        """
        Merge a partial update into an existing entity.

        The updater works on a copy which replaces the stored entity only
        once the updater has returned.

        Returns:
            The updated entity, or None if entity_id is unknown
        """
        with self._lock:
            current = self._items.get(entity_id)
            if current is None:
                return None

            updated = self._updater(current.model_copy(deep=True), data)
            updated.touch()
            self._items[entity_id] = updated
            logger.debug(f"{self.name}: updated {entity_id} fields={sorted(data)}")
            return updated

    def delete(self, entity_id: str) -> bool:
        """Remove an entity; returns whether it existed."""
        with self._lock:
            removed = self._items.pop(entity_id, None) is not None
            if removed:
                logger.debug(f"{self.name}: deleted {entity_id}")
            return removed

    def count(self) -> int:
        with self._lock:
            return len(self._items)
