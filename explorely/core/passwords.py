"""
Password hashing and credential format rules.

bcrypt only reads the first 72 bytes of its input and current releases
reject anything longer, so passwords are reduced to a fixed-length
base64 SHA-256 digest before hashing.

Dependencies: bcrypt, hashlib, re
System role: Credential material for the authentication provider
"""

import base64
import hashlib
import re

import bcrypt

PASSWORD_PATTERN = re.compile(r"^(?=.*?[A-Z])(?=.*?[a-z])(?=.*?[0-9]).{8,}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.]+$")
USERNAME_MIN_LENGTH = 6
USERNAME_MAX_LENGTH = 30


def _digest(password: str) -> bytes:
    # 44 ASCII bytes, well inside bcrypt's 72-byte input limit
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str, rounds: int = 12) -> str:
    """
    Hash a password with a fresh bcrypt salt.

    Args:
        password: Plain-text password of any length
        rounds: bcrypt cost factor

    Returns:
        str: bcrypt hash, safe to store
    """
    hashed = bcrypt.hashpw(_digest(password), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain-text password against a stored bcrypt hash."""
    return bcrypt.checkpw(_digest(password), password_hash.encode("utf-8"))


def is_strong_password(password: str) -> bool:
    """At least 8 chars with an uppercase letter, a lowercase letter and a digit."""
    return PASSWORD_PATTERN.match(password) is not None


def is_valid_email(email: str) -> bool:
    """Loose email shape check: something@something.tld, no whitespace."""
    return EMAIL_PATTERN.match(email) is not None


def is_valid_username(username: str) -> bool:
    """6-30 chars of letters, digits, underscores and dots."""
    return (
        USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH
        and USERNAME_PATTERN.match(username) is not None
    )
