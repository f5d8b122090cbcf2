"""Password hashing utilities built on bcrypt."""
from __future__ import annotations

import logging

import bcrypt

logger = logging.getLogger(__name__)

_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")

# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with a fresh salt.

    Args:
        password: Plain text password.
        rounds: bcrypt cost factor.

    Returns:
        The encoded hash, which embeds the salt and cost.
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if ``plain_password`` matches the stored hash.

    The comparison inside ``bcrypt.checkpw`` is constant-time. Hashes that are
    not bcrypt-formatted never match, and neither does a password longer than
    :data:`MAX_PASSWORD_BYTES`, which bcrypt would otherwise truncate.
    """
    if len(plain_password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return False
    if not hashed_password.startswith(_BCRYPT_PREFIXES):
        logger.warning("Rejected verification against a non-bcrypt password hash")
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Rejected verification against a malformed bcrypt hash")
        return False
