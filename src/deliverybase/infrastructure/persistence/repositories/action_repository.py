"""Action repository for database operations."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from deliverybase.infrastructure.persistence.models import ActionModel


class ActionRepository:
    """Repository for the read-only action catalogue."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def get_by_names(self, names: list[str]) -> list[ActionModel]:
        """Resolve action names to rows.

        Unknown names are silently absent from the result; callers compare
        counts to detect them.

        Args:
            names: Action names to resolve.

        Returns:
            Matching action models.
        """
        if not names:
            return []
        result = await self.session.execute(
            select(ActionModel).where(ActionModel.name.in_(names))
        )
        return list(result.scalars().all())

    async def get_paginated(
        self,
        page: int = 1,
        page_size: int = 5,
        action_type: str | None = None,
    ) -> tuple[list[ActionModel], int]:
        """Get a page of the action catalogue ordered by ID.

        Args:
            page: Page number (1-indexed).
            page_size: Number of items per page.
            action_type: Optional category filter.

        Returns:
            Tuple of (list of actions, total count).
        """
        query = select(ActionModel)
        count_query = select(func.count(ActionModel.id))
        if action_type:
            query = query.where(ActionModel.type == action_type)
            count_query = count_query.where(ActionModel.type == action_type)

        total = (await self.session.execute(count_query)).scalar_one() or 0

        offset = (page - 1) * page_size
        result = await self.session.execute(
            query.order_by(ActionModel.id.asc()).offset(offset).limit(page_size)
        )
        return list(result.scalars().all()), total
