# Password hashing and verification (bcrypt)
# myflix/core/security.py

import logging
from typing import Optional

import bcrypt

from myflix.core.config import settings

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def hash_password(plaintext: str, rounds: Optional[int] = None) -> str:
    """
    Produces a salted bcrypt digest of ``plaintext``.

    A fresh salt is generated on every call and embedded in the returned
    digest, so hashing the same password twice yields different strings.

    Args:
        plaintext: The password as submitted by the user.
        rounds: bcrypt work factor. Defaults to ``settings.BCRYPT_ROUNDS``.

    Returns:
        The digest as an ASCII string (``$2b$<rounds>$<salt+hash>``).

    Raises:
        ValueError: If the password is longer than bcrypt accepts.
    """
    password_bytes = plaintext.encode("utf-8")
    if len(password_bytes) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes.")
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password_bytes, salt).decode("ascii")


def verify_password(plaintext: str, digest: Optional[str]) -> bool:
    """
    Checks ``plaintext`` against a digest produced by :func:`hash_password`.

    Never raises for a malformed or missing digest; those simply do not match.
    """
    if not plaintext or not digest:
        return False
    try:
        return bcrypt.checkpw(plaintext.encode("utf-8"), digest.encode("utf-8"))
    except (ValueError, TypeError) as e:
        logger.warning(f"Password verification against malformed digest: {e}")
        return False
