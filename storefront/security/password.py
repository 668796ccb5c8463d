"""
Password hashing and verification utilities using bcrypt.

This module provides secure password hashing and verification functionality
for the admin login.
"""

import logging
from passlib.context import CryptContext

logger = logging.getLogger(__name__)

# bcrypt for new hashes; PBKDF2 hashes from older installs still verify
pwd_context = CryptContext(schemes=["bcrypt", "pbkdf2_sha256"], deprecated="auto")

BCRYPT_MAX_BYTES = 72


def _fit_bcrypt(password: str) -> str:
    """Trim a password to bcrypt's 72-byte input limit without splitting a character."""
    password_bytes = password.encode('utf-8')
    if len(password_bytes) <= BCRYPT_MAX_BYTES:
        return password
    return password_bytes[:BCRYPT_MAX_BYTES].decode('utf-8', errors='ignore')


def hash_password(password: str) -> str:
    """
    Hash a plaintext password using bcrypt.

    Args:
        password: The plaintext password to hash

    Returns:
        The hashed password as a string

    Example:
        >>> hashed = hash_password("mysecretpassword")
        >>> len(hashed) > 20  # Hashes are long strings
        True
    """
    return pwd_context.hash(_fit_bcrypt(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plaintext password against a hashed password.

    Args:
        plain_password: The plaintext password to verify
        hashed_password: The stored hash to verify against

    Returns:
        True if the password matches, False otherwise (including for
        unrecognised or malformed hashes)

    Example:
        >>> hashed = hash_password("mysecretpassword")
        >>> verify_password("mysecretpassword", hashed)
        True
        >>> verify_password("wrongpassword", hashed)
        False
    """
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(_fit_bcrypt(plain_password), hashed_password)
    except ValueError:
        logger.warning("Stored password hash could not be parsed")
        return False
