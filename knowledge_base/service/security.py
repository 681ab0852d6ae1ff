"""
Password hashing.

Thin wrapper around a passlib bcrypt CryptContext so the round count can be
configured per application (lowered in tests).
"""

from passlib.context import CryptContext

DEFAULT_BCRYPT_ROUNDS = 10


class PasswordHasher:
    """Hashes and verifies passwords with bcrypt."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True if password matches password_hash; False for empty hashes."""
        if not password_hash:
            return False
        return self._context.verify(password, password_hash)
