"""
Password hashing utilities using bcrypt directly.
"""

import bcrypt

from shared.config.logging import get_logger

logger = get_logger(__name__)

_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Returns:
        Hashed password string (includes salt and algorithm info).
    """
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Only bcrypt hashes are accepted; anything else fails verification.
    """
    if not hashed_password.startswith(_BCRYPT_PREFIXES):
        logger.warning("SECURITY: non-bcrypt password hash found on account")
        return False

    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
