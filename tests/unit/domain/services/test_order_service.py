"""Unit tests for OrderService."""

from datetime import date, datetime, timezone

import pytest

from deliverybase.core.errors import (
    BadRequestError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
)
from deliverybase.domain.entities import NotificationKind, OrderStatus, StateUpdate
from deliverybase.domain.services import OrderService, day_range


@pytest.fixture
def make_order(db_session, customer, make_address):
    """Factory creating a committed order for the customer."""

    async def factory(amount: int = 2, status: OrderStatus = OrderStatus.PENDING):
        address = await make_address(customer)
        order = await OrderService(db_session).create_order(
            user_id=customer.id,
            amount=amount,
            total_price=amount * 4.5,
            address_id=address.id,
        )
        order.status = status.value
        await db_session.commit()
        return order

    return factory


class TestGuardedTransitions:

    @pytest.mark.asyncio
    async def test_new_order_is_pending(self, make_order):
        order = await make_order()

        assert order.status == OrderStatus.PENDING.value
        assert order.delivery_id is None

    @pytest.mark.asyncio
    async def test_create_order_unknown_address(self, db_session, customer):
        with pytest.raises(NotFoundError):
            await OrderService(db_session).create_order(customer.id, 1, 1.0, 9999)

    @pytest.mark.asyncio
    async def test_cancel_pending(self, db_session, make_order):
        order = await make_order()

        cancelled = await OrderService(db_session).cancel_order(order.id)

        assert cancelled.status == OrderStatus.CANCELLED.value

    @pytest.mark.asyncio
    async def test_cannot_cancel_confirmed(self, db_session, make_order):
        order = await make_order()
        service = OrderService(db_session)
        await service.confirm_order(order.id)

        with pytest.raises(InvalidTransitionError):
            await service.cancel_order(order.id)

        assert order.status == OrderStatus.CONFIRMED.value

    @pytest.mark.asyncio
    async def test_invalid_transition_is_a_conflict(self, db_session, make_order):
        order = await make_order(status=OrderStatus.DELIVERED)

        with pytest.raises(ConflictError):
            await OrderService(db_session).confirm_order(order.id)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", ["cancel_order", "confirm_order"])
    @pytest.mark.parametrize(
        "status", [OrderStatus.CONFIRMED, OrderStatus.CANCELLED, OrderStatus.WAITING]
    )
    async def test_only_pending_orders_can_be_cancelled_or_confirmed(
        self, db_session, make_order, operation, status
    ):
        order = await make_order(status=status)

        with pytest.raises(ConflictError):
            await getattr(OrderService(db_session), operation)(order.id)

        assert order.status == status.value

    @pytest.mark.asyncio
    async def test_missing_order(self, db_session):
        with pytest.raises(NotFoundError):
            await OrderService(db_session).confirm_order(9999)


class TestAssignDelivery:

    @pytest.mark.asyncio
    async def test_assign_confirmed_order(self, db_session, make_order, courier):
        order = await make_order(status=OrderStatus.CONFIRMED)

        assigned = await OrderService(db_session).assign_delivery(order.id, courier.id)

        assert assigned.status == OrderStatus.WAITING.value
        assert assigned.delivery_id == courier.id

    @pytest.mark.asyncio
    async def test_assign_pending_order(self, db_session, make_order, courier):
        order = await make_order()

        with pytest.raises(InvalidTransitionError):
            await OrderService(db_session).assign_delivery(order.id, courier.id)

    @pytest.mark.asyncio
    async def test_assign_to_non_courier(self, db_session, make_order, customer):
        order = await make_order(status=OrderStatus.CONFIRMED)

        with pytest.raises(ConflictError):
            await OrderService(db_session).assign_delivery(order.id, customer.id)

        assert order.delivery_id is None
        assert order.status == OrderStatus.CONFIRMED.value

    @pytest.mark.asyncio
    async def test_assign_to_unknown_user(self, db_session, make_order):
        order = await make_order(status=OrderStatus.CONFIRMED)

        with pytest.raises(ConflictError):
            await OrderService(db_session).assign_delivery(order.id, 9999)


class TestChangeStates:

    @pytest.mark.asyncio
    async def test_override_ignores_transition_table(
        self, db_session, session_factory, notifier, make_order
    ):
        order = await make_order(status=OrderStatus.CANCELLED)
        service = OrderService(db_session, notifier=notifier, session_factory=session_factory)

        results = await service.change_states(
            [StateUpdate(order_id=order.id, status=OrderStatus.PENDING)]
        )
        await db_session.refresh(order)

        assert results[0].updated is True
        assert order.status == OrderStatus.PENDING.value
        notifier.publish.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_order_does_not_stop_others(
        self, db_session, session_factory, notifier, make_order
    ):
        first = await make_order()
        second = await make_order()
        service = OrderService(db_session, notifier=notifier, session_factory=session_factory)

        results = await service.change_states(
            [
                StateUpdate(order_id=first.id, status=OrderStatus.CONFIRMED),
                StateUpdate(order_id=9999, status=OrderStatus.CONFIRMED),
                StateUpdate(order_id=second.id, status=OrderStatus.WAITING),
            ]
        )
        await db_session.refresh(first)
        await db_session.refresh(second)

        assert [result.order_id for result in results] == [first.id, 9999, second.id]
        assert [result.updated for result in results] == [True, False, True]
        assert results[1].error == "Order not found"
        assert first.status == OrderStatus.CONFIRMED.value
        assert second.status == OrderStatus.WAITING.value

    @pytest.mark.asyncio
    async def test_delivered_notifies_every_time(
        self, db_session, session_factory, notifier, make_order, customer
    ):
        order = await make_order(amount=3, status=OrderStatus.WAITING)
        service = OrderService(db_session, notifier=notifier, session_factory=session_factory)

        for _ in range(2):
            results = await service.change_states(
                [StateUpdate(order_id=order.id, status=OrderStatus.DELIVERED)]
            )
            assert results[0].notified is True

        assert notifier.publish.call_count == 2
        notification = notifier.publish.call_args.args[0]
        assert notification.kind is NotificationKind.ORDER_DELIVERED
        assert notification.to == customer.email
        assert notification.variables["name"] == customer.name
        assert notification.variables["quantity"] == 3
        assert notification.variables["address"] == "Av. Amazonas N34-451, Quito"

    @pytest.mark.asyncio
    async def test_requires_session_factory(self, db_session):
        with pytest.raises(RuntimeError):
            await OrderService(db_session).change_states(
                [StateUpdate(order_id=1, status=OrderStatus.CONFIRMED)]
            )


class TestListings:

    @pytest.mark.asyncio
    async def test_newest_first(self, db_session, make_order):
        orders = [await make_order() for _ in range(3)]

        listed, total, pages = await OrderService(db_session).list_orders(page=1, limit=10)

        assert [order.id for order in listed] == [order.id for order in reversed(orders)]
        assert total == 3
        assert pages == 1

    @pytest.mark.asyncio
    async def test_pagination(self, db_session, make_order):
        for _ in range(3):
            await make_order()

        listed, total, pages = await OrderService(db_session).list_orders(page=2, limit=2)

        assert len(listed) == 1
        assert total == 3
        assert pages == 2

    @pytest.mark.asyncio
    async def test_status_filter(self, db_session, make_order):
        await make_order()
        confirmed = await make_order(status=OrderStatus.CONFIRMED)

        listed, total, _ = await OrderService(db_session).list_orders(
            status=OrderStatus.CONFIRMED
        )

        assert [order.id for order in listed] == [confirmed.id]
        assert total == 1

    @pytest.mark.asyncio
    async def test_orders_by_user_include_relations(self, db_session, make_order, customer):
        await make_order()

        listed, _, _ = await OrderService(db_session).list_orders_by_user(customer.id)

        assert listed[0].user.email == customer.email
        assert listed[0].address.city == "Quito"

    @pytest.mark.asyncio
    async def test_orders_by_unknown_user(self, db_session):
        with pytest.raises(NotFoundError):
            await OrderService(db_session).list_orders_by_user(9999)

    @pytest.mark.asyncio
    async def test_orders_by_delivery_with_date(self, db_session, make_order, courier):
        order = await make_order(status=OrderStatus.CONFIRMED)
        service = OrderService(db_session)
        await service.assign_delivery(order.id, courier.id)
        await db_session.commit()

        today = datetime.now(timezone.utc).date()
        listed, total, _ = await service.list_orders_by_delivery(courier.id, on=today)
        assert [o.id for o in listed] == [order.id]
        assert total == 1

        listed, total, _ = await service.list_orders_by_delivery(
            courier.id, start_date=date(2000, 1, 1), end_date=date(2000, 1, 31)
        )
        assert listed == []
        assert total == 0

    @pytest.mark.asyncio
    async def test_orders_by_delivery_rejects_mixed_filters(self, db_session, courier):
        with pytest.raises(BadRequestError):
            await OrderService(db_session).list_orders_by_delivery(
                courier.id, on=date(2024, 1, 1), start_date=date(2024, 1, 1)
            )


class TestDayRange:

    def test_no_filter(self):
        assert day_range() == (None, None)

    def test_single_day(self):
        assert day_range(on=date(2024, 3, 5)) == (
            datetime(2024, 3, 5),
            datetime(2024, 3, 6),
        )

    def test_inclusive_range(self):
        assert day_range(start=date(2024, 3, 5), end=date(2024, 3, 7)) == (
            datetime(2024, 3, 5),
            datetime(2024, 3, 8),
        )

    def test_incomplete_range(self):
        with pytest.raises(BadRequestError):
            day_range(start=date(2024, 3, 5))

    def test_reversed_range(self):
        with pytest.raises(BadRequestError):
            day_range(start=date(2024, 3, 7), end=date(2024, 3, 5))
