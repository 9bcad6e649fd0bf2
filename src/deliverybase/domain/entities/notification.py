"""Outbound notification messages.

Notifications are emitted by services and drained by the notification
dispatcher independently of the request that produced them.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class NotificationKind(str, Enum):
    """Email template kinds."""

    CONFIRMATION = "confirmation"
    PASSWORD_RESET = "password-reset"
    ORDER_DELIVERED = "order-delivered"


@dataclass(frozen=True)
class Notification:
    """A message destined for a single recipient.

    Attributes:
        kind: Template to render.
        to: Recipient email address.
        variables: Template variables (name, token, order details, ...).
        created_at: When the notification was emitted.
    """

    kind: NotificationKind
    to: str
    variables: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate notification data after initialization."""
        if not self.to:
            raise ValueError("Recipient is required")
