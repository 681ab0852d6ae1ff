"""
UserRepository - user accounts on top of the generic EntityStore.

The user factory enforces email format and uniqueness; plain passwords are
hashed through the injected PasswordHasher and never stored.
"""

import logging
import re
from typing import Any, List, Mapping, Optional

from knowledge_base.core import (
    EntityStore, User, UserRole, ValidationFailure,
)

from .security import PasswordHasher

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _validate_email(email: Any) -> str:
    if not isinstance(email, str) or not EMAIL_PATTERN.match(email):
        raise ValidationFailure("Invalid email format")
    return email


def _validate_role(role: Any) -> UserRole:
    try:
        return UserRole.normalize(role)
    except ValueError as e:
        raise ValidationFailure(str(e)) from e


class UserRepository:
    """User accounts with lookups by email and role."""

    def __init__(self, hasher: PasswordHasher):
        self._hasher = hasher
        self._store: EntityStore[User] = EntityStore(
            factory=self._create_user,
            updater=self._update_user,
            name="users",
        )

    @property
    def store(self) -> EntityStore[User]:
        return self._store

    # ==================== Store hooks ====================

    def _create_user(self, data: Mapping[str, Any]) -> User:
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValidationFailure("User name is required")

        email = _validate_email(data.get("email"))
        if self.find_by_email(email) is not None:
            raise ValidationFailure("User with this email already exists")

        role = _validate_role(data["role"]) if data.get("role") else UserRole.VIEWER

        password_hash = data.get("password_hash")
        if data.get("password"):
            password_hash = self._hasher.hash(data["password"])

        return User(name=name, email=email, role=role, password_hash=password_hash)

    def _update_user(self, user: User, data: Mapping[str, Any]) -> User:
        if data.get("name") or data.get("email"):
            email = _validate_email(data["email"]) if data.get("email") else user.email
            existing = self.find_by_email(email)
            if existing is not None and existing.id != user.id:
                raise ValidationFailure("User with this email already exists")
            user.update_profile(data.get("name") or user.name, email)

        if data.get("role"):
            user.update_role(_validate_role(data["role"]))

        if data.get("password"):
            user.set_password_hash(self._hasher.hash(data["password"]))

        return user

    # ==================== Generic contract ====================

    def create(self, data: Mapping[str, Any]) -> User:
        user = self._store.create(data)
        logger.info(f"Created user {user.id} <{user.email}> role={user.role.value}")
        return user

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self._store.find_by_id(user_id)

    def find_all(self, skip: int = 0, limit: int = 10) -> List[User]:
        return self._store.find_all(skip, limit)

    def update(self, user_id: str, data: Mapping[str, Any]) -> Optional[User]:
        return self._store.update(user_id, data)

    def delete(self, user_id: str) -> bool:
        return self._store.delete(user_id)

    def count(self) -> int:
        return self._store.count()

    # ==================== Lookups ====================

    def find_by_email(self, email: str) -> Optional[User]:
        matches = self._store.find(lambda user: user.email == email)
        return matches[0] if matches else None

    def find_by_role(self, role: Any) -> List[User]:
        """All users holding a role; the role name is matched case-insensitively."""
        normalized = _validate_role(role)
        return self._store.find(lambda user: user.role == normalized)
