"""
AuthService - login, token issuance and refresh-token rotation.

Access and refresh tokens are HS256 JWTs signed with separate secrets.
Issued refresh tokens are tracked in memory; a refresh token is accepted
only while it is in that set, and each refresh rotates it.
"""

import logging
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Set

from jose import JWTError, jwt

from knowledge_base.core import AuthenticationError, User, UserRole

from .security import PasswordHasher
from .users import UserRepository

logger = logging.getLogger(__name__)


@dataclass
class AuthSettings:
    """Secrets and lifetimes for issued tokens."""
    jwt_secret: str
    jwt_refresh_secret: str
    jwt_algorithm: str = "HS256"
    access_token_ttl: timedelta = timedelta(minutes=15)
    refresh_token_ttl: timedelta = timedelta(days=7)


@dataclass
class TokenPayload:
    """Identity carried by a verified access token."""
    user_id: str
    email: str
    role: UserRole


@dataclass
class AuthResult:
    """Outcome of a successful login."""
    user: User
    access_token: str
    refresh_token: str


class AuthService:
    """Authenticates users and manages their tokens."""

    def __init__(self, users: UserRepository, hasher: PasswordHasher, settings: AuthSettings):
        self._users = users
        self._hasher = hasher
        self._settings = settings
        self._lock = threading.Lock()
        self._refresh_tokens: Set[str] = set()

    def authenticate(self, email: str, password: str) -> AuthResult:
        """
        Check credentials and issue a token pair.

        Raises:
            AuthenticationError: If the user is unknown or the password is wrong
        """
        user = self._users.find_by_email(email)
        if user is None:
            logger.warning(f"Login failed: unknown email {email}")
            raise AuthenticationError("User not found")

        if not self._hasher.verify(password, user.password_hash or ""):
            logger.warning(f"Login failed: wrong password for {email}")
            raise AuthenticationError("Invalid password")

        access_token = self._generate_access_token(user)
        refresh_token = self._generate_refresh_token(user)
        with self._lock:
            self._refresh_tokens.add(refresh_token)

        logger.info(f"User {user.id} logged in")
        return AuthResult(user=user, access_token=access_token, refresh_token=refresh_token)

    def logout(self, refresh_token: str) -> None:
        with self._lock:
            if refresh_token not in self._refresh_tokens:
                raise AuthenticationError("Invalid refresh token")
            self._refresh_tokens.discard(refresh_token)

    def refresh(self, refresh_token: str) -> Dict[str, str]:
        """
        Exchange a refresh token for a new access/refresh pair.

        The presented token is always consumed. A token that fails signature
        or expiry checks, or whose user no longer exists, is discarded.
        """
        with self._lock:
            if refresh_token not in self._refresh_tokens:
                raise AuthenticationError("Invalid refresh token")
            self._refresh_tokens.discard(refresh_token)

        try:
            payload = jwt.decode(
                refresh_token,
                self._settings.jwt_refresh_secret,
                algorithms=[self._settings.jwt_algorithm],
            )
        except JWTError as e:
            raise AuthenticationError("Invalid refresh token") from e

        user = self._users.find_by_id(payload.get("sub", ""))
        if user is None or payload.get("type") != "refresh":
            raise AuthenticationError("Invalid refresh token")

        new_refresh_token = self._generate_refresh_token(user)
        with self._lock:
            self._refresh_tokens.add(new_refresh_token)

        return {
            "access_token": self._generate_access_token(user),
            "refresh_token": new_refresh_token,
        }

    def verify_access_token(self, token: str) -> TokenPayload:
        """
        Decode an access token.

        Raises:
            AuthenticationError: If the token is malformed, expired or not an access token
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.jwt_secret,
                algorithms=[self._settings.jwt_algorithm],
            )
            if payload.get("type") != "access":
                raise AuthenticationError("Invalid or expired token")
            return TokenPayload(
                user_id=payload["sub"],
                email=payload["email"],
                role=UserRole.normalize(payload["role"]),
            )
        except (JWTError, KeyError, ValueError) as e:
            raise AuthenticationError("Invalid or expired token") from e

    def _claims(self, user: User, token_type: str, ttl: timedelta) -> Dict[str, Any]:
        return {
            "sub": user.id,
            "email": user.email,
            "role": user.role.value,
            "type": token_type,
            "exp": datetime.utcnow() + ttl,
        }

    def _generate_access_token(self, user: User) -> str:
        claims = self._claims(user, "access", self._settings.access_token_ttl)
        return jwt.encode(claims, self._settings.jwt_secret, algorithm=self._settings.jwt_algorithm)

    def _generate_refresh_token(self, user: User) -> str:
        claims = self._claims(user, "refresh", self._settings.refresh_token_ttl)
        claims["jti"] = str(uuid.uuid4())
        return jwt.encode(claims, self._settings.jwt_refresh_secret, algorithm=self._settings.jwt_algorithm)
