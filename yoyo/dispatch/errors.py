# yoyo/dispatch/errors.py
from __future__ import annotations


class DispatchError(Exception):
    """Base class for errors raised by the dispatch core."""


class InvalidCredentials(DispatchError):
    def __init__(self, username: str) -> None:
        super().__init__(f"Bad credentials for {username!r}")
        self.username = username


class IllegalTransition(DispatchError):
    def __init__(self, order_id: int, current: str, requested: str) -> None:
        super().__init__(f"Order {order_id}: cannot move from {current} to {requested}")
        self.order_id = order_id
        self.current = current
        self.requested = requested
