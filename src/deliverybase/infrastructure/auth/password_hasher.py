"""Password hashing using Argon2id."""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerifyMismatchError

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    Args:
        password: The plaintext password to hash.

    Returns:
        The hashed password string.
    """
    return _hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a stored hash.

    Args:
        password: The plaintext password to verify.
        hashed: The stored hash.

    Returns:
        True if the password matches, False otherwise (including for a
        malformed stored hash).
    """
    try:
        return _hasher.verify(hashed, password)
    except (VerifyMismatchError, InvalidHashError):
        return False


def needs_rehash(hashed: str) -> bool:
    """Check whether a hash was produced with outdated parameters."""
    return _hasher.check_needs_rehash(hashed)
