"""Unit tests for password hashing utilities."""

from deliverybase.infrastructure.auth.password_hasher import (
    hash_password,
    needs_rehash,
    verify_password,
)


class TestHashPassword:
    """Tests for hash_password function."""

    def test_hash_password_returns_argon2_hash(self):
        hashed = hash_password("SecureP@ss123!")

        assert hashed.startswith("$argon2id$")

    def test_hash_password_different_for_same_input(self):
        """Hashing the same password twice produces different hashes (salt)."""
        assert hash_password("SecureP@ss123!") != hash_password("SecureP@ss123!")


class TestVerifyPassword:
    """Tests for verify_password function."""

    def test_verify_password_correct(self):
        hashed = hash_password("SecureP@ss123!")

        assert verify_password("SecureP@ss123!", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = hash_password("SecureP@ss123!")

        assert verify_password("WrongPassword", hashed) is False

    def test_verify_password_malformed_hash(self):
        assert verify_password("whatever", "not-an-argon2-hash") is False


def test_fresh_hash_does_not_need_rehash():
    assert needs_rehash(hash_password("SecureP@ss123!")) is False
