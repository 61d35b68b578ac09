"""
Scorekeeper Backend — Credential Hashing
==========================================

What:  Salted one-way hashing and constant-time verification of passwords.
How:   bcrypt with a fixed cost factor (settings.bcrypt_rounds, default 10).
       These functions are CPU-bound; async callers run them through
       asyncio.to_thread.
"""

from functools import lru_cache

import bcrypt

from scorekeeper.config import settings
from scorekeeper.exceptions import ValidationError

# bcrypt only looks at the first 72 bytes and newer releases reject longer input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of ``password``."""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            message=f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
            field="password",
        )
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(encoded, salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Constant-time comparison of ``password`` against a stored bcrypt hash."""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


@lru_cache(maxsize=1)
def dummy_hash() -> str:
    """
    A throwaway hash compared against when the user name is unknown, so a
    missing account costs the same bcrypt work as a wrong password.
    """
    return hash_password("scorekeeper-placeholder")
