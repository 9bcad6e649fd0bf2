"""Unit tests for the JWT access token service."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from deliverybase.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTService,
    TokenExpiredError,
)

SECRET = "test-secret-key-with-enough-length-for-hs256"


@pytest.fixture
def service() -> JWTService:
    return JWTService(secret_key=SECRET)


class TestJWTService:

    def test_create_access_token_claims(self, service):
        """The token carries the user id and the confirmation flag."""
        token = service.create_access_token(user_id=42, confirmed=True)

        decoded = jwt.decode(token, SECRET, algorithms=["HS256"], issuer="deliverybase")

        assert decoded["sub"] == "42"
        assert decoded["user_id"] == 42
        assert decoded["confirmed"] is True
        assert "exp" in decoded
        assert "iat" in decoded

    def test_create_access_token_expiration(self, service):
        expires_delta = timedelta(minutes=15)
        start_time = datetime.now(timezone.utc)

        token = service.create_access_token(7, False, expires_delta=expires_delta)
        decoded = jwt.decode(token, SECRET, algorithms=["HS256"], issuer="deliverybase")
        exp_dt = datetime.fromtimestamp(decoded["exp"], tz=timezone.utc)

        # Allow small window for execution time
        assert (
            start_time + expires_delta - timedelta(seconds=2)
            <= exp_dt
            <= start_time + expires_delta + timedelta(seconds=2)
        )

    def test_decode_token_roundtrip(self, service):
        token = service.create_access_token(3, False)

        payload = service.decode_token(token)

        assert payload["user_id"] == 3
        assert payload["confirmed"] is False

    def test_decode_expired_token(self, service):
        token = service.create_access_token(3, True, expires_delta=timedelta(seconds=-1))

        with pytest.raises(TokenExpiredError):
            service.decode_token(token)

    def test_decode_token_wrong_secret(self, service):
        token = JWTService(secret_key="another-secret-key-of-sufficient-length").create_access_token(
            3, True
        )

        with pytest.raises(InvalidTokenError):
            service.decode_token(token)

    def test_decode_token_without_user_id(self, service):
        """Tokens signed with the right key but lacking user_id are rejected."""
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"iss": "deliverybase", "sub": "3", "iat": now, "exp": now + timedelta(minutes=5)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            service.decode_token(token)

    def test_decode_garbage(self, service):
        with pytest.raises(InvalidTokenError):
            service.decode_token("not-a-token")
