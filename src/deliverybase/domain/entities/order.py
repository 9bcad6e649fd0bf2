"""Order lifecycle entities.

Defines the order statuses and the transitions allowed by the guarded
single-order operations. The bulk status change path is an administrative
override and does not consult ``ALLOWED_TRANSITIONS``.
"""

from dataclasses import dataclass
from enum import Enum


class OrderStatus(str, Enum):
    """Status of an order."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    WAITING = "WAITING"
    DELIVERED = "DELIVERED"


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.WAITING}),
    OrderStatus.WAITING: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.DELIVERED: frozenset(),
}

TERMINAL_STATUSES = frozenset({OrderStatus.CANCELLED, OrderStatus.DELIVERED})


def can_transition(current: str, target: OrderStatus) -> bool:
    """Check whether a guarded transition from ``current`` to ``target`` is allowed.

    Args:
        current: Stored status value.
        target: Requested status.

    Returns:
        True if the transition table permits the move.
    """
    try:
        source = OrderStatus(current)
    except ValueError:
        return False
    return target in ALLOWED_TRANSITIONS[source]


@dataclass(frozen=True)
class StateUpdate:
    """One entry of a bulk status change request.

    Attributes:
        order_id: Order to update.
        status: Status to write, unconditionally.
    """

    order_id: int
    status: OrderStatus


@dataclass
class StateUpdateResult:
    """Outcome of applying one ``StateUpdate``.

    Attributes:
        order_id: Order the entry referred to.
        status: Requested status.
        updated: Whether the write was committed.
        error: Failure message when ``updated`` is False.
        notified: Whether a delivery notification was emitted.
    """

    order_id: int
    status: OrderStatus
    updated: bool
    error: str | None = None
    notified: bool = False
