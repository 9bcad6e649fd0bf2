"""JWT access token service.

Access tokens carry the user id and the confirmation flag and expire after
``access_token_expire_minutes`` (one day by default).
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from deliverybase.core.config import get_settings


class JWTError(Exception):
    """Base exception for JWT-related errors."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class JWTService:
    """Service for creating and validating access tokens."""

    ALGORITHM = "HS256"
    ISSUER = "deliverybase"

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Secret key for signing tokens. If not provided,
                        uses the configured secret key from settings.
        """
        self._secret_key = secret_key

    @property
    def secret_key(self) -> str:
        """Get the secret key for signing tokens."""
        if self._secret_key:
            return self._secret_key
        return get_settings().secret_key

    def create_access_token(
        self,
        user_id: int,
        confirmed: bool,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create an access token.

        Args:
            user_id: The user's ID.
            confirmed: Whether the user's email is confirmed.
            expires_delta: Custom expiration time. Defaults to config value.

        Returns:
            Encoded JWT access token.
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=get_settings().access_token_expire_minutes)

        now = datetime.now(timezone.utc)
        payload = {
            "iss": self.ISSUER,
            "sub": str(user_id),
            "iat": now,
            "exp": now + expires_delta,
            "user_id": user_id,
            "confirmed": confirmed,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.ALGORITHM)

    def decode_token(self, token: str) -> dict[str, Any]:
        """Decode and validate an access token.

        Args:
            token: The encoded JWT token.

        Returns:
            Decoded token payload.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is invalid or lacks a user id.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.ISSUER,
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

        if not isinstance(payload.get("user_id"), int):
            raise InvalidTokenError("Token has no user id")
        return payload

    def get_expires_in(self) -> int:
        """Get the access token lifetime in seconds."""
        return get_settings().access_token_expire_minutes * 60


# Default JWT service instance
jwt_service = JWTService()
