"""
Configuration for the App Host server.

Provides sensible defaults that can be overridden via environment variables
or by passing a custom AppConfig to create_app(). Secrets and seed users are
carried here and handed to the services at construction time.
"""

import os
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, List

from knowledge_base.service import AuthSettings


def _default_seed_users() -> List[Dict[str, Any]]:
    return [
        {"name": "Admin User", "email": "admin@dkbs.com", "password": "admin123", "role": "Admin"},
        {"name": "Editor User", "email": "editor@dkbs.com", "password": "editor123", "role": "Editor"},
        {"name": "Viewer User", "email": "viewer@dkbs.com", "password": "viewer123", "role": "Viewer"},
    ]


@dataclass
class AppConfig:
    """Configuration for the app host server."""

    # Server configuration
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # API configuration
    api_prefix: str = field(default_factory=lambda: os.getenv("API_PREFIX", "/api"))
    cors_origins: List[str] = field(
        default_factory=lambda: [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    )

    # Token configuration
    jwt_secret: str = field(default_factory=lambda: os.getenv("JWT_SECRET", "your-secret-key"))
    jwt_refresh_secret: str = field(
        default_factory=lambda: os.getenv("JWT_REFRESH_SECRET", "your-refresh-secret-key")
    )
    jwt_algorithm: str = field(default_factory=lambda: os.getenv("JWT_ALGORITHM", "HS256"))
    access_token_minutes: int = field(default_factory=lambda: int(os.getenv("ACCESS_TOKEN_MINUTES", "15")))
    refresh_token_days: int = field(default_factory=lambda: int(os.getenv("REFRESH_TOKEN_DAYS", "7")))
    bcrypt_rounds: int = field(default_factory=lambda: int(os.getenv("BCRYPT_ROUNDS", "10")))

    # Seeding configuration
    app_env: str = field(default_factory=lambda: os.getenv("APP_ENV", "development"))
    seed_default_users: bool = field(
        default_factory=lambda: os.getenv("SEED_DEFAULT_USERS", "").lower() == "true"
        or (os.getenv("SEED_DEFAULT_USERS") is None and os.getenv("APP_ENV", "development").upper() != "PROD")
    )
    seed_users: List[Dict[str, Any]] = field(default_factory=_default_seed_users)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create configuration from environment variables."""
        return cls()

    def auth_settings(self) -> AuthSettings:
        """Token settings for AuthService."""
        return AuthSettings(
            jwt_secret=self.jwt_secret,
            jwt_refresh_secret=self.jwt_refresh_secret,
            jwt_algorithm=self.jwt_algorithm,
            access_token_ttl=timedelta(minutes=self.access_token_minutes),
            refresh_token_ttl=timedelta(days=self.refresh_token_days),
        )
