"""
Pytest fixtures for knowledge_base.service tests.

Provides shared test fixtures for:
- Fast password hashing (minimum bcrypt rounds)
- Topic, user and resource repositories
- An AuthService with a seeded user
"""

from datetime import timedelta

import pytest

from knowledge_base.service import (
    TopicRepository, UserRepository, ResourceRepository,
    PasswordHasher, AuthService, AuthSettings,
)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def topics() -> TopicRepository:
    return TopicRepository()


@pytest.fixture
def users(hasher) -> UserRepository:
    return UserRepository(hasher)


@pytest.fixture
def resources() -> ResourceRepository:
    return ResourceRepository()


@pytest.fixture
def auth_settings() -> AuthSettings:
    return AuthSettings(
        jwt_secret="test-secret",
        jwt_refresh_secret="test-refresh-secret",
        access_token_ttl=timedelta(minutes=5),
        refresh_token_ttl=timedelta(days=1),
    )


@pytest.fixture
def auth(users, hasher, auth_settings) -> AuthService:
    return AuthService(users, hasher, auth_settings)


@pytest.fixture
def editor(users):
    """A stored Editor with password 'editor123'."""
    return users.create({
        "name": "Editor User",
        "email": "editor@dkbs.com",
        "password": "editor123",
        "role": "Editor",
    })
