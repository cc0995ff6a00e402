# yoyo/dispatch/ledger.py
from __future__ import annotations

import logging
import threading
from typing import Any, Iterable, List, Optional

from ..seed import MOCK_ORDERS, STORAGE_KEY_ORDERS
from ..store import PersistentStore
from .lifecycle import check_transition
from .records import ORDERS, CamelModel, NewOrder, Order, OrderStatus, next_id

logger = logging.getLogger(__name__)


class OrderFilter(CamelModel):
    """Dispatch board filter. Empty criteria match everything."""

    delivery_date: Optional[str] = None
    courier_id: Optional[int] = None
    dropoff_contains: Optional[str] = None

    def matches(self, order: Order) -> bool:
        date_match = not self.delivery_date or order.delivery_date == self.delivery_date
        courier_match = self.courier_id is None or order.courier_id == self.courier_id
        city_match = not self.dropoff_contains or self.dropoff_contains in order.dropoff_address
        return date_match and courier_match and city_match


class OrderLedger:
    """Delivery orders and their status changes.

    Orders are appended by ``add`` and replaced by id through ``update``;
    nothing is ever deleted. Every change is written to the store before the
    in-memory list is swapped, so a failed write leaves both untouched.
    Changes are serialized on an internal lock, so concurrent callers never
    share an id or overwrite each other's write.

    ``update`` accepts any status. With ``strict=True`` the transition helpers
    (``assign``, ``advance_status``, ``record_proof``) only allow the forward
    steps of the lifecycle and raise ``IllegalTransition`` otherwise.
    """

    def __init__(
        self,
        store: PersistentStore,
        seed: Iterable[Order] = MOCK_ORDERS,
        strict: bool = False,
    ) -> None:
        self._store = store
        self.strict = strict
        self._lock = threading.RLock()
        self._orders: List[Order] = store.load(STORAGE_KEY_ORDERS, list(seed), ORDERS)

    @property
    def orders(self) -> List[Order]:
        return list(self._orders)

    def get(self, order_id: int) -> Optional[Order]:
        return next((o for o in self._orders if o.id == order_id), None)

    def add(self, new_order: NewOrder) -> Order:
        with self._lock:
            order = Order(
                id=next_id(self._orders),
                status=OrderStatus.NEW,
                **new_order.model_dump(),
            )
            self._commit([*self._orders, order])

        logger.info("Order %s created (%s -> %s)", order.id, order.pickup_address, order.dropoff_address)
        return order

    def update(self, order: Order) -> None:
        with self._lock:
            if self.get(order.id) is None:
                logger.debug("Order %s not found, update dropped", order.id)
                return
            self._commit([order if o.id == order.id else o for o in self._orders])

    def filter(self, criteria: Optional[OrderFilter] = None) -> List[Order]:
        if criteria is None:
            return self.orders
        return [o for o in self._orders if criteria.matches(o)]

    def assign(self, order_id: int, courier_id: int) -> None:
        self._transition(order_id, OrderStatus.ASSIGNED, courier_id=courier_id)

    def advance_status(self, order_id: int, new_status: OrderStatus | str) -> None:
        self._transition(order_id, OrderStatus(new_status))

    def record_proof(
        self,
        order_id: int,
        signature: Optional[str] = None,
        proof_photo: Optional[str] = None,
    ) -> None:
        proof = {}
        if signature is not None:
            proof["signature"] = signature
        if proof_photo is not None:
            proof["proof_photo"] = proof_photo
        self._transition(order_id, OrderStatus.DELIVERED, **proof)

    def _transition(self, order_id: int, status: OrderStatus, **changes: Any) -> None:
        with self._lock:
            order = self.get(order_id)
            if order is None:
                logger.debug("Order %s not found, %s dropped", order_id, status.value)
                return

            if self.strict:
                check_transition(order_id, order.status, status)

            self.update(order.model_copy(update={"status": status, **changes}))

        logger.info("Order %s: %s -> %s", order_id, order.status.value, status.value)

    def _commit(self, orders: List[Order]) -> None:
        self._store.save(STORAGE_KEY_ORDERS, orders, ORDERS)
        self._orders = orders
