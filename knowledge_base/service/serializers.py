"""
JSON serialization utilities for the service layer.

Provides consistent serialization of entities, hierarchy trees, version
snapshots and paginated listings for API responses.
"""

import json
import math
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Sequence

from pydantic import BaseModel

from knowledge_base.core import TopicNode

from .auth import AuthResult


def json_serializer(obj: Any) -> Any:
    """
    Custom JSON serializer for objects not serializable by default.

    Handles:
    - datetime objects -> ISO format strings
    - Enum members -> their values
    """
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def serialize_to_json(data: Any) -> Any:
    """
    Serialize data to JSON-compatible format.

    Returns a JSON-safe dict/list structure.
    """
    return json.loads(json.dumps(data, default=json_serializer))


def serialize_model(model: BaseModel) -> Dict[str, Any]:
    """Serialize an entity or snapshot to a dictionary (excluded fields omitted)."""
    return serialize_to_json(model.model_dump())


def serialize_models(models: Sequence[BaseModel]) -> List[Dict[str, Any]]:
    return [serialize_model(model) for model in models]


def serialize_topic_node(node: TopicNode) -> Dict[str, Any]:
    """Serialize a hierarchy tree as nested {topic, children} dicts."""
    return {
        "topic": serialize_model(node.topic),
        "children": [serialize_topic_node(child) for child in node.children],
    }


def serialize_hierarchy(nodes: Sequence[TopicNode]) -> List[Dict[str, Any]]:
    return [serialize_topic_node(node) for node in nodes]


def serialize_page(
    items: Sequence[BaseModel],
    page: int,
    limit: int,
    total: int,
) -> Dict[str, Any]:
    """Serialize one page of a listing with its paging metadata."""
    return {
        "items": serialize_models(items),
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": math.ceil(total / limit) if limit else 0,
    }


def serialize_auth_result(result: AuthResult) -> Dict[str, Any]:
    return {
        "user": serialize_model(result.user),
        "access_token": result.access_token,
        "refresh_token": result.refresh_token,
    }
