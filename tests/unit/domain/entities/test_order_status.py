"""Unit tests for the order transition table."""

import pytest

from deliverybase.domain.entities import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    OrderStatus,
    can_transition,
)


@pytest.mark.parametrize(
    "current,target",
    [
        (OrderStatus.PENDING, OrderStatus.CONFIRMED),
        (OrderStatus.PENDING, OrderStatus.CANCELLED),
        (OrderStatus.CONFIRMED, OrderStatus.WAITING),
        (OrderStatus.WAITING, OrderStatus.DELIVERED),
    ],
)
def test_allowed_transitions(current, target):
    assert can_transition(current.value, target) is True


@pytest.mark.parametrize(
    "current,target",
    [
        (OrderStatus.CONFIRMED, OrderStatus.CANCELLED),
        (OrderStatus.PENDING, OrderStatus.WAITING),
        (OrderStatus.PENDING, OrderStatus.DELIVERED),
        (OrderStatus.WAITING, OrderStatus.PENDING),
        (OrderStatus.CANCELLED, OrderStatus.PENDING),
        (OrderStatus.DELIVERED, OrderStatus.WAITING),
    ],
)
def test_rejected_transitions(current, target):
    assert can_transition(current.value, target) is False


def test_terminal_statuses_have_no_exits():
    for status in TERMINAL_STATUSES:
        assert ALLOWED_TRANSITIONS[status] == frozenset()


def test_unknown_stored_status_cannot_move():
    assert can_transition("LOST", OrderStatus.CONFIRMED) is False


def test_every_status_has_a_table_entry():
    assert set(ALLOWED_TRANSITIONS) == set(OrderStatus)
