from __future__ import annotations

import pytest

from yoyo.dispatch.errors import IllegalTransition
from yoyo.dispatch.lifecycle import allowed_next, can_transition, check_transition
from yoyo.dispatch.records import OrderStatus


def test_single_forward_path() -> None:
    status = OrderStatus.NEW
    path = [status]
    while allowed_next(status):
        (status,) = allowed_next(status)
        path.append(status)

    assert path == [
        OrderStatus.NEW,
        OrderStatus.ASSIGNED,
        OrderStatus.IN_PROGRESS,
        OrderStatus.DELIVERED,
    ]


@pytest.mark.parametrize(
    "current, requested",
    [
        ("new", "in-progress"),
        ("new", "delivered"),
        ("assigned", "new"),
        ("in-progress", "assigned"),
        ("delivered", "new"),
        ("delivered", "delivered"),
    ],
)
def test_illegal_moves(current: str, requested: str) -> None:
    assert not can_transition(current, requested)
    with pytest.raises(IllegalTransition):
        check_transition(7, current, requested)


def test_accepts_plain_strings() -> None:
    assert can_transition("assigned", "in-progress")
    check_transition(1, "in-progress", "delivered")


def test_error_message() -> None:
    with pytest.raises(IllegalTransition, match="Order 3: cannot move from new to delivered"):
        check_transition(3, OrderStatus.NEW, OrderStatus.DELIVERED)
