"""Outbound notification channel.

Services publish notifications without waiting for delivery. A background
worker, started with the application, drains the queue and sends each
notification through ``EmailService``. Delivery failures are logged and never
reach the publisher.
"""

import asyncio

from deliverybase.core.logging import get_logger
from deliverybase.domain.entities import Notification
from deliverybase.infrastructure.services.email_service import EmailService

logger = get_logger(__name__)


class NotificationDispatcher:
    """Bounded in-process queue of notifications drained by a worker task."""

    def __init__(self, email_service: EmailService, max_queue_size: int = 1000) -> None:
        """Initialize the dispatcher.

        Args:
            email_service: Service used to render and send notifications.
            max_queue_size: Maximum number of undelivered notifications.
        """
        self.email_service = email_service
        self._queue: asyncio.Queue[Notification] = asyncio.Queue(maxsize=max_queue_size)
        self._worker: asyncio.Task | None = None

    @property
    def pending(self) -> int:
        """Number of notifications waiting for delivery."""
        return self._queue.qsize()

    @property
    def running(self) -> bool:
        """Whether the background worker is active."""
        return self._worker is not None and not self._worker.done()

    def publish(self, notification: Notification) -> bool:
        """Queue a notification for delivery.

        Never blocks and never raises.

        Args:
            notification: Notification to deliver.

        Returns:
            True if queued, False if the queue was full and it was dropped.
        """
        try:
            self._queue.put_nowait(notification)
        except asyncio.QueueFull:
            logger.error(
                "Notification queue full, dropping notification",
                kind=notification.kind.value,
                to=notification.to,
            )
            return False
        logger.debug("Notification queued", kind=notification.kind.value, to=notification.to)
        return True

    async def start(self) -> None:
        """Start the background worker."""
        if self.running:
            return
        self._worker = asyncio.create_task(self._run(), name="notification-dispatcher")
        logger.info("Notification dispatcher started")

    async def stop(self) -> None:
        """Deliver what is queued, then stop the background worker."""
        await self.flush()
        if self._worker is not None:
            self._worker.cancel()
            try:
                await self._worker
            except asyncio.CancelledError:
                pass
            self._worker = None
        logger.info("Notification dispatcher stopped")

    async def flush(self) -> int:
        """Deliver every queued notification in the current task.

        Returns:
            Number of notifications processed.
        """
        processed = 0
        while True:
            try:
                notification = self._queue.get_nowait()
            except asyncio.QueueEmpty:
                return processed
            try:
                await self._deliver(notification)
            finally:
                self._queue.task_done()
            processed += 1

    async def _run(self) -> None:
        while True:
            notification = await self._queue.get()
            try:
                await self._deliver(notification)
            finally:
                self._queue.task_done()

    async def _deliver(self, notification: Notification) -> None:
        try:
            await self.email_service.send_notification(notification)
        except Exception as e:
            logger.error(
                "Failed to deliver notification",
                kind=notification.kind.value,
                to=notification.to,
                error=str(e),
                error_type=type(e).__name__,
            )
