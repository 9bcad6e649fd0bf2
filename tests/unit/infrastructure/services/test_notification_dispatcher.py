"""Unit tests for the notification dispatcher."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from deliverybase.domain.entities import Notification, NotificationKind
from deliverybase.infrastructure.services import NotificationDispatcher


def _notification(to: str = "ana@example.com") -> Notification:
    return Notification(
        kind=NotificationKind.ORDER_DELIVERED,
        to=to,
        variables={"name": "Ana", "quantity": 2, "address": "Av. Amazonas, Quito"},
    )


@pytest.fixture
def email_service() -> AsyncMock:
    service = AsyncMock()
    service.send_notification.return_value = True
    return service


@pytest.mark.asyncio
async def test_publish_queues_without_sending(email_service):
    dispatcher = NotificationDispatcher(email_service)

    assert dispatcher.publish(_notification()) is True

    assert dispatcher.pending == 1
    email_service.send_notification.assert_not_called()


@pytest.mark.asyncio
async def test_flush_delivers_queued(email_service):
    dispatcher = NotificationDispatcher(email_service)
    dispatcher.publish(_notification("a@example.com"))
    dispatcher.publish(_notification("b@example.com"))

    processed = await dispatcher.flush()

    assert processed == 2
    assert dispatcher.pending == 0
    sent_to = [call.args[0].to for call in email_service.send_notification.call_args_list]
    assert sent_to == ["a@example.com", "b@example.com"]


@pytest.mark.asyncio
async def test_full_queue_drops(email_service):
    dispatcher = NotificationDispatcher(email_service, max_queue_size=1)

    assert dispatcher.publish(_notification()) is True
    assert dispatcher.publish(_notification()) is False
    assert dispatcher.pending == 1


@pytest.mark.asyncio
async def test_delivery_failure_is_contained(email_service):
    email_service.send_notification.side_effect = [RuntimeError("smtp down"), True]
    dispatcher = NotificationDispatcher(email_service)
    dispatcher.publish(_notification("a@example.com"))
    dispatcher.publish(_notification("b@example.com"))

    processed = await dispatcher.flush()

    assert processed == 2
    assert email_service.send_notification.await_count == 2


@pytest.mark.asyncio
async def test_worker_drains_in_background(email_service):
    dispatcher = NotificationDispatcher(email_service)
    await dispatcher.start()
    assert dispatcher.running

    dispatcher.publish(_notification())
    for _ in range(50):
        if email_service.send_notification.await_count:
            break
        await asyncio.sleep(0.01)

    await dispatcher.stop()

    assert email_service.send_notification.await_count == 1
    assert dispatcher.running is False
