"""Order lifecycle.

Single-order operations (cancel, confirm, assign delivery) enforce the
transition table in ``deliverybase.domain.entities.order``. The bulk status
change is an administrative override: it writes the requested status
unconditionally, one independent unit of work per entry.
"""

import asyncio
from datetime import date, datetime, time, timedelta

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from deliverybase.core.errors import (
    BadRequestError,
    ConflictError,
    DeliveryBaseError,
    InvalidTransitionError,
    NotFoundError,
)
from deliverybase.core.logging import get_logger
from deliverybase.domain.entities import (
    ROLE_DELIVERY,
    Notification,
    NotificationKind,
    OrderStatus,
    StateUpdate,
    StateUpdateResult,
    can_transition,
)
from deliverybase.domain.services.pagination import total_pages
from deliverybase.infrastructure.persistence.models import OrderModel
from deliverybase.infrastructure.persistence.repositories import (
    AddressRepository,
    OrderRepository,
    UserRepository,
)
from deliverybase.infrastructure.services.notification_dispatcher import NotificationDispatcher

logger = get_logger(__name__)


def day_range(
    on: date | None = None,
    start: date | None = None,
    end: date | None = None,
) -> tuple[datetime | None, datetime | None]:
    """Translate day filters into a half-open ``[from, before)`` interval.

    Args:
        on: A single day.
        start: First day of an inclusive range.
        end: Last day of an inclusive range.

    Returns:
        Tuple of (inclusive lower bound, exclusive upper bound), both None
        when no filter was given.

    Raises:
        BadRequestError: If the filters are combined or incomplete.
    """
    if on is not None:
        if start is not None or end is not None:
            raise BadRequestError("Use either a single date or a date range, not both")
        start = end = on
    elif start is None and end is None:
        return None, None
    elif start is None or end is None:
        raise BadRequestError("A date range needs both a start and an end date")

    if end < start:
        raise BadRequestError("The end date cannot be before the start date")

    return datetime.combine(start, time.min), datetime.combine(end + timedelta(days=1), time.min)


class OrderService:
    """Service for order lifecycle business logic."""

    def __init__(
        self,
        session: AsyncSession,
        notifier: NotificationDispatcher | None = None,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        """Initialize the order service.

        Args:
            session: SQLAlchemy async session for single-order operations.
            notifier: Outbound channel for delivery notifications.
            session_factory: Factory for the independent units of work used by
                the bulk status change.
        """
        self.session = session
        self.notifier = notifier
        self.session_factory = session_factory
        self.order_repo = OrderRepository(session)
        self.address_repo = AddressRepository(session)
        self.user_repo = UserRepository(session)

    async def _get_order(self, order_id: int) -> OrderModel:
        order = await self.order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError("Order not found")
        return order

    async def _transition(self, order: OrderModel, target: OrderStatus) -> None:
        if not can_transition(order.status, target):
            raise InvalidTransitionError(
                f"Order cannot move from {order.status} to {target.value}"
            )
        previous = order.status
        order.status = target.value
        await self.order_repo.update(order)
        logger.info(
            "Order status changed",
            order_id=order.id,
            from_status=previous,
            to_status=target.value,
        )

    async def create_order(
        self,
        user_id: int,
        amount: int,
        total_price: float,
        address_id: int,
    ) -> OrderModel:
        """Place a new order in ``PENDING``.

        Raises:
            NotFoundError: If the user or address does not exist.
        """
        if await self.user_repo.get_by_id(user_id) is None:
            raise NotFoundError("User not found")
        if await self.address_repo.get_by_id(address_id) is None:
            raise NotFoundError("Address not found")

        order = await self.order_repo.create(
            OrderModel(
                amount=amount,
                total_price=total_price,
                status=OrderStatus.PENDING.value,
                address_id=address_id,
                user_id=user_id,
            )
        )
        logger.info("Order created", order_id=order.id, user_id=user_id, amount=amount)
        return order

    async def cancel_order(self, order_id: int) -> OrderModel:
        """Cancel a pending order.

        Raises:
            NotFoundError: If the order does not exist.
            InvalidTransitionError: If the order is not ``PENDING``.
        """
        order = await self._get_order(order_id)
        await self._transition(order, OrderStatus.CANCELLED)
        return order

    async def confirm_order(self, order_id: int) -> OrderModel:
        """Confirm a pending order.

        Raises:
            NotFoundError: If the order does not exist.
            InvalidTransitionError: If the order is not ``PENDING``.
        """
        order = await self._get_order(order_id)
        await self._transition(order, OrderStatus.CONFIRMED)
        return order

    async def assign_delivery(self, order_id: int, delivery_user_id: int) -> OrderModel:
        """Assign a confirmed order to a courier and move it to ``WAITING``.

        Raises:
            NotFoundError: If the order does not exist.
            InvalidTransitionError: If the order is not ``CONFIRMED``.
            ConflictError: If the target user does not exist or does not hold
                ``ROLE_DELIVERY``.
        """
        order = await self._get_order(order_id)
        if not can_transition(order.status, OrderStatus.WAITING):
            raise InvalidTransitionError(
                f"Order cannot be assigned while {order.status}"
            )

        courier = await self.user_repo.get_by_id(delivery_user_id)
        if courier is None or courier.role_name != ROLE_DELIVERY:
            raise ConflictError("The selected user is not a delivery user")

        order.delivery_id = courier.id
        await self._transition(order, OrderStatus.WAITING)
        return order

    async def change_states(self, updates: list[StateUpdate]) -> list[StateUpdateResult]:
        """Overwrite the status of several orders.

        Entries are applied concurrently, each in its own unit of work. A
        failed entry does not undo the others. ``DELIVERED`` entries publish
        a delivery notification after their commit, every time.

        Args:
            updates: Status changes to apply.

        Returns:
            One result per entry, in request order.
        """
        if self.session_factory is None:
            raise RuntimeError("change_states requires a session factory")

        outcomes = await asyncio.gather(
            *(self._apply_state(update) for update in updates),
            return_exceptions=True,
        )

        results = []
        for update, outcome in zip(updates, outcomes):
            if isinstance(outcome, StateUpdateResult):
                results.append(outcome)
                continue
            logger.error(
                "Order status update failed",
                order_id=update.order_id,
                error=str(outcome),
                error_type=type(outcome).__name__,
            )
            results.append(
                StateUpdateResult(
                    order_id=update.order_id,
                    status=update.status,
                    updated=False,
                    error="Internal server error",
                )
            )
        return results

    async def _apply_state(self, update: StateUpdate) -> StateUpdateResult:
        async with self.session_factory() as session:
            order = await OrderRepository(session).get_by_id_with_relations(update.order_id)
            if order is None:
                return StateUpdateResult(
                    order_id=update.order_id,
                    status=update.status,
                    updated=False,
                    error="Order not found",
                )

            previous = order.status
            order.status = update.status.value
            await session.commit()

        logger.info(
            "Order status overridden",
            order_id=order.id,
            from_status=previous,
            to_status=update.status.value,
        )

        notified = False
        if update.status is OrderStatus.DELIVERED:
            notified = self._notify_delivered(order)

        return StateUpdateResult(
            order_id=order.id,
            status=update.status,
            updated=True,
            notified=notified,
        )

    def _notify_delivered(self, order: OrderModel) -> bool:
        if self.notifier is None:
            return False
        return self.notifier.publish(
            Notification(
                kind=NotificationKind.ORDER_DELIVERED,
                to=order.user.email,
                variables={
                    "name": order.user.name,
                    "quantity": order.amount,
                    "address": f"{order.address.address}, {order.address.city}",
                },
            )
        )

    async def list_orders(
        self,
        page: int = 1,
        limit: int = 10,
        status: OrderStatus | None = None,
    ) -> tuple[list[OrderModel], int, int]:
        """Page through all orders with their owner and address.

        Returns:
            Tuple of (orders, total count, total pages).
        """
        orders, total = await self.order_repo.get_paginated(
            page=page,
            page_size=limit,
            status=status.value if status else None,
            with_relations=True,
        )
        return orders, total, total_pages(total, limit)

    async def list_orders_by_user(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 10,
        status: OrderStatus | None = None,
    ) -> tuple[list[OrderModel], int, int]:
        """Page through one customer's orders.

        Raises:
            NotFoundError: If the user does not exist.
        """
        if await self.user_repo.get_by_id(user_id) is None:
            raise NotFoundError("User not found")
        orders, total = await self.order_repo.get_paginated(
            page=page,
            page_size=limit,
            status=status.value if status else None,
            user_id=user_id,
            with_relations=True,
        )
        return orders, total, total_pages(total, limit)

    async def list_orders_by_delivery(
        self,
        delivery_id: int,
        page: int = 1,
        limit: int = 10,
        status: OrderStatus | None = None,
        on: date | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> tuple[list[OrderModel], int, int]:
        """Page through the orders assigned to a courier.

        Args:
            delivery_id: Courier user ID.
            page: Page number (1-indexed).
            limit: Page size.
            status: Optional status filter.
            on: Only orders created on this day.
            start_date: First day of an inclusive creation date range.
            end_date: Last day of an inclusive creation date range.

        Raises:
            BadRequestError: If the date filters are inconsistent.
        """
        created_from, created_before = day_range(on, start_date, end_date)
        orders, total = await self.order_repo.get_paginated(
            page=page,
            page_size=limit,
            status=status.value if status else None,
            delivery_id=delivery_id,
            created_from=created_from,
            created_before=created_before,
            with_relations=True,
        )
        return orders, total, total_pages(total, limit)
