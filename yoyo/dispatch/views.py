# yoyo/dispatch/views.py
from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from ..seed import TIME_SLOTS
from .accounts import IdentityDirectory
from .geocode import waze_url
from .ledger import OrderFilter, OrderLedger
from .lifecycle import ACTIVE_STATUSES
from .records import Account, Order, OrderStatus
from .session import View

# Dispatch board columns, left to right
STATUS_COLUMNS: List[Tuple[OrderStatus, str]] = [
    (OrderStatus.NEW, "New"),
    (OrderStatus.ASSIGNED, "Assigned"),
    (OrderStatus.IN_PROGRESS, "In progress"),
    (OrderStatus.DELIVERED, "Delivered"),
]

COURIER_STATUS_LABELS = {
    OrderStatus.ASSIGNED: "Awaiting pickup",
    OrderStatus.IN_PROGRESS: "On the way to customer",
}

# Card action offered by each status, per view
DISPATCH_ACTIONS = {OrderStatus.NEW: "assign"}
DELIVERY_ACTIONS = {OrderStatus.ASSIGNED: "start", OrderStatus.IN_PROGRESS: "deliver"}


def login_view() -> Dict[str, Any]:
    return {"view": View.LOGIN.value}


def intake_view(account: Account, today: Optional[date] = None) -> Dict[str, Any]:
    today = today or date.today()
    return {
        "view": View.INTAKE.value,
        "user": {"id": account.id, "name": account.name},
        "timeSlots": list(TIME_SLOTS),
        "minDeliveryDate": today.isoformat(),
    }


def dispatch_view(
    account: Account,
    ledger: OrderLedger,
    directory: IdentityDirectory,
    criteria: Optional[OrderFilter] = None,
) -> Dict[str, Any]:
    orders = ledger.filter(criteria)
    couriers = directory.couriers()
    names = {c.id: c.name for c in couriers}

    columns = []
    for status, title in STATUS_COLUMNS:
        cards = [_dispatch_card(o, names) for o in orders if o.status == status]
        columns.append({"status": status.value, "title": title, "count": len(cards), "orders": cards})

    return {
        "view": View.DISPATCH.value,
        "user": {"id": account.id, "name": account.name},
        "filters": (criteria or OrderFilter()).dump(),
        "couriers": [{"id": c.id, "name": c.name} for c in couriers],
        "columns": columns,
    }


def _dispatch_card(order: Order, courier_names: Dict[int, str]) -> Dict[str, Any]:
    card = order.dump()
    if order.courier_id is not None:
        card["courierName"] = courier_names.get(order.courier_id)
    card["action"] = DISPATCH_ACTIONS.get(order.status)
    return card


def courier_orders(ledger: OrderLedger, courier_id: int) -> List[Order]:
    return [o for o in ledger.orders if o.courier_id == courier_id and o.status in ACTIVE_STATUSES]


def delivery_view(account: Account, ledger: OrderLedger) -> Dict[str, Any]:
    return {
        "view": View.DELIVERY.value,
        "user": {"id": account.id, "name": account.name},
        "orders": [_delivery_card(o) for o in courier_orders(ledger, account.id)],
    }


def _delivery_card(order: Order) -> Dict[str, Any]:
    # Navigate to the pickup until the courier has started, then to the drop-off
    destination = order.pickup_address if order.status == OrderStatus.ASSIGNED else order.dropoff_address
    card = order.dump()
    card["statusLabel"] = COURIER_STATUS_LABELS.get(order.status)
    card["navigateTo"] = destination
    card["wazeUrl"] = waze_url(destination)
    card["action"] = DELIVERY_ACTIONS.get(order.status)
    return card
