"""Order repository for database operations."""

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from deliverybase.infrastructure.persistence.models import OrderModel


class OrderRepository:
    """Repository for order database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, order: OrderModel) -> OrderModel:
        """Create a new order.

        Args:
            order: Order model to create.

        Returns:
            Created order model.
        """
        self.session.add(order)
        await self.session.flush()
        return order

    async def get_by_id(self, order_id: int) -> OrderModel | None:
        """Get an order by ID.

        Args:
            order_id: Order ID.

        Returns:
            Order model if found, None otherwise.
        """
        result = await self.session.execute(
            select(OrderModel).where(OrderModel.id == order_id)
        )
        return result.scalar_one_or_none()

    async def get_by_id_with_relations(self, order_id: int) -> OrderModel | None:
        """Get an order with its owner and address loaded."""
        result = await self.session.execute(
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .options(selectinload(OrderModel.user), selectinload(OrderModel.address))
        )
        return result.scalar_one_or_none()

    async def get_paginated(
        self,
        page: int = 1,
        page_size: int = 10,
        status: str | None = None,
        user_id: int | None = None,
        delivery_id: int | None = None,
        created_from: datetime | None = None,
        created_before: datetime | None = None,
        with_relations: bool = False,
    ) -> tuple[list[OrderModel], int]:
        """Get a page of orders, newest first.

        Args:
            page: Page number (1-indexed).
            page_size: Number of items per page.
            status: Optional status filter.
            user_id: Optional owner filter.
            delivery_id: Optional assigned courier filter.
            created_from: Inclusive lower bound on ``created_at``.
            created_before: Exclusive upper bound on ``created_at``.
            with_relations: Load the owner and address of each order.

        Returns:
            Tuple of (list of orders, total count).
        """
        conditions = []
        if status:
            conditions.append(OrderModel.status == status)
        if user_id is not None:
            conditions.append(OrderModel.user_id == user_id)
        if delivery_id is not None:
            conditions.append(OrderModel.delivery_id == delivery_id)
        if created_from is not None:
            conditions.append(OrderModel.created_at >= created_from)
        if created_before is not None:
            conditions.append(OrderModel.created_at < created_before)

        count_result = await self.session.execute(
            select(func.count(OrderModel.id)).where(*conditions)
        )
        total = count_result.scalar_one() or 0

        query = select(OrderModel).where(*conditions)
        if with_relations:
            query = query.options(
                selectinload(OrderModel.user), selectinload(OrderModel.address)
            )

        offset = (page - 1) * page_size
        result = await self.session.execute(
            query.order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .offset(offset)
            .limit(page_size)
        )
        return list(result.scalars().all()), total

    async def update(self, order: OrderModel) -> OrderModel:
        """Flush pending changes on an order."""
        await self.session.flush()
        return order
