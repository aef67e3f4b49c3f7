"""Password hashing with bcrypt."""

from __future__ import annotations

import bcrypt

DEFAULT_COST = 10
MAX_PASSWORD_BYTES = 72


def generate_hash(plain: str) -> str:
    """Return a bcrypt hash of ``plain`` at the default cost.

    Raises ValueError when the password is longer than bcrypt can handle.
    """
    encoded = plain.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password length exceeds {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=DEFAULT_COST)).decode("ascii")


def match_hash(plain: str, hashed: str) -> bool:
    """Tell whether ``plain`` matches the bcrypt hash ``hashed``."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False