"""
Pytest fixtures for api_host tests.

Builds the app with fast bcrypt, fixed secrets and the default seed users,
and logs in as each role.
"""

from typing import Dict

import pytest
from fastapi.testclient import TestClient

from knowledge_base.api_host.config import AppConfig
from knowledge_base.api_host.server import create_app


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(
        jwt_secret="test-secret",
        jwt_refresh_secret="test-refresh-secret",
        bcrypt_rounds=4,
        seed_default_users=True,
        cors_origins=["*"],
    )


@pytest.fixture
def client(app_config) -> TestClient:
    return TestClient(create_app(app_config))


def _login(client: TestClient, email: str, password: str) -> Dict[str, str]:
    response = client.post("/api/users/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def admin_session(client) -> Dict[str, str]:
    """Login response (user, access_token, refresh_token) for the seeded admin."""
    return _login(client, "admin@dkbs.com", "admin123")


@pytest.fixture
def admin_headers(admin_session) -> Dict[str, str]:
    return {"Authorization": f"Bearer {admin_session['access_token']}"}


@pytest.fixture
def editor_headers(client) -> Dict[str, str]:
    session = _login(client, "editor@dkbs.com", "editor123")
    return {"Authorization": f"Bearer {session['access_token']}"}


@pytest.fixture
def viewer_headers(client) -> Dict[str, str]:
    session = _login(client, "viewer@dkbs.com", "viewer123")
    return {"Authorization": f"Bearer {session['access_token']}"}
