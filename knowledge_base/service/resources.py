"""
ResourceRepository - learning resources attached to topics.
"""

from typing import Any, List, Mapping, Optional

from knowledge_base.core import (
    EntityStore, Resource, ResourceType, ValidationFailure,
)


def _validate_type(value: Any) -> ResourceType:
    try:
        return ResourceType(value)
    except ValueError as e:
        raise ValidationFailure(
            "Invalid resource type. Type must be one of: video, article, pdf"
        ) from e


def _require_string(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise ValidationFailure(f"Resource {key} is required")
    return value


def _optional_string(data: Mapping[str, Any], key: str) -> Optional[str]:
    # Absent, None and "" all mean "keep the current value"
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValidationFailure(f"Resource {key} must be a string")
    return value or None


class ResourceRepository:
    """Resources with lookups by topic and by type."""

    def __init__(self):
        self._store: EntityStore[Resource] = EntityStore(
            factory=self._create_resource,
            updater=self._update_resource,
            name="resources",
        )

    @property
    def store(self) -> EntityStore[Resource]:
        return self._store

    @staticmethod
    def _create_resource(data: Mapping[str, Any]) -> Resource:
        return Resource(
            topic_id=_require_string(data, "topic_id"),
            url=_require_string(data, "url"),
            description=data.get("description") or "",
            type=_validate_type(data.get("type")),
        )

    @staticmethod
    def _update_resource(resource: Resource, data: Mapping[str, Any]) -> Resource:
        url = _optional_string(data, "url")
        description = _optional_string(data, "description")
        topic_id = _optional_string(data, "topic_id")
        resource_type = _validate_type(data["type"]) if data.get("type") else None

        if url or description or resource_type:
            resource.update_details(
                url or resource.url,
                description or resource.description,
                resource_type or resource.type,
            )
        if topic_id:
            resource.update_topic(topic_id)
        return resource

    def create(self, data: Mapping[str, Any]) -> Resource:
        return self._store.create(data)

    def find_by_id(self, resource_id: str) -> Optional[Resource]:
        return self._store.find_by_id(resource_id)

    def find_all(self, skip: int = 0, limit: int = 10) -> List[Resource]:
        return self._store.find_all(skip, limit)

    def update(self, resource_id: str, data: Mapping[str, Any]) -> Optional[Resource]:
        return self._store.update(resource_id, data)

    def delete(self, resource_id: str) -> bool:
        return self._store.delete(resource_id)

    def count(self) -> int:
        return self._store.count()

    def find_by_topic_id(self, topic_id: str) -> List[Resource]:
        return self._store.find(lambda resource: resource.topic_id == topic_id)

    def find_by_type(self, type: Any) -> List[Resource]:
        resource_type = _validate_type(type)
        return self._store.find(lambda resource: resource.type == resource_type)
