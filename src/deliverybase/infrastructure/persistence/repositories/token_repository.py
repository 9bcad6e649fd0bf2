"""Token repository for database operations."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from deliverybase.infrastructure.persistence.models import TokenModel


class TokenRepository:
    """Repository for one-time confirmation and reset tokens."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, token: TokenModel) -> TokenModel:
        """Store a new token."""
        self.session.add(token)
        await self.session.flush()
        return token

    async def get_by_token(self, token: str) -> TokenModel | None:
        """Look up a token by its value, with its user loaded.

        Args:
            token: Opaque token value.

        Returns:
            Token model if found, None otherwise.
        """
        result = await self.session.execute(
            select(TokenModel)
            .where(TokenModel.token == token)
            .options(selectinload(TokenModel.user))
        )
        return result.scalar_one_or_none()

    async def delete(self, token: TokenModel) -> None:
        """Delete a token after use."""
        await self.session.execute(delete(TokenModel).where(TokenModel.id == token.id))
        await self.session.flush()
