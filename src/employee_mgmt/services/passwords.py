"""Salted SHA-256 password hashing.

Stored format is ``base64(salt) + ":" + base64(sha256(salt || password))``
with a 16-byte random salt, so hashes written by earlier deployments of the
system keep verifying.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import re
import secrets

SALT_BYTES = 16
MIN_PASSWORD_LENGTH = 8

PASSWORD_REQUIREMENTS = (
    "Password must be at least 8 characters long and contain "
    "at least one uppercase letter, one lowercase letter, and one digit"
)


def _digest(salt: bytes, password: str) -> bytes:
    return hashlib.sha256(salt + password.encode("utf-8")).digest()


def hash_password(password: str, salt: bytes | None = None) -> str:
    """Hash a password with a fresh (or supplied) salt."""
    if salt is None:
        salt = secrets.token_bytes(SALT_BYTES)
    encoded_salt = base64.b64encode(salt).decode("ascii")
    encoded_hash = base64.b64encode(_digest(salt, password)).decode("ascii")
    return f"{encoded_salt}:{encoded_hash}"


def verify_password(password: str, stored: str) -> bool:
    """Constant-time check of a password against a stored hash.

    Malformed stored values simply fail verification.
    """
    if not password or not stored or ":" not in stored:
        return False
    encoded_salt, _, encoded_hash = stored.partition(":")
    try:
        salt = base64.b64decode(encoded_salt, validate=True)
        expected = base64.b64decode(encoded_hash, validate=True)
    except (binascii.Error, ValueError):
        return False
    return hmac.compare_digest(_digest(salt, password), expected)


def is_strong_password(password: str | None) -> bool:
    """At least 8 characters with an uppercase, a lowercase and a digit."""
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        return False
    return all(
        re.search(pattern, password) for pattern in (r"[A-Z]", r"[a-z]", r"\d")
    )
