# yoyo/dispatch/lifecycle.py
"""Order status lifecycle: new -> assigned -> in-progress -> delivered."""
from __future__ import annotations

from typing import Dict, Tuple

from .errors import IllegalTransition
from .records import OrderStatus

# Current status -> statuses it may move to
TRANSITIONS: Dict[OrderStatus, Tuple[OrderStatus, ...]] = {
    OrderStatus.NEW: (OrderStatus.ASSIGNED,),
    OrderStatus.ASSIGNED: (OrderStatus.IN_PROGRESS,),
    OrderStatus.IN_PROGRESS: (OrderStatus.DELIVERED,),
    OrderStatus.DELIVERED: (),  # terminal
}

# Statuses that show up on a courier's work list
ACTIVE_STATUSES: Tuple[OrderStatus, ...] = (OrderStatus.ASSIGNED, OrderStatus.IN_PROGRESS)


def allowed_next(status: OrderStatus | str) -> Tuple[OrderStatus, ...]:
    return TRANSITIONS.get(OrderStatus(status), ())


def can_transition(current: OrderStatus | str, requested: OrderStatus | str) -> bool:
    return OrderStatus(requested) in allowed_next(current)


def check_transition(order_id: int, current: OrderStatus | str, requested: OrderStatus | str) -> None:
    if not can_transition(current, requested):
        raise IllegalTransition(order_id, OrderStatus(current).value, OrderStatus(requested).value)
