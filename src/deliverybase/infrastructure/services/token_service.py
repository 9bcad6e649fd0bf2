"""One-time token generation."""

import secrets


class TokenService:
    """Service for generating secure random tokens."""

    @staticmethod
    def generate_token(length: int = 16) -> str:
        """Generate a cryptographically secure random hex token.

        Args:
            length: Number of random bytes. Default is 16 bytes (32 hex chars).

        Returns:
            Hexadecimal token string.
        """
        return secrets.token_hex(length)


# Default token service instance
token_service = TokenService()
