# yoyo/dispatch/records.py
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    CUSTOMER = "customer"
    MANAGER = "manager"
    COURIER = "courier"


class OrderStatus(str, Enum):
    NEW = "new"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in-progress"
    DELIVERED = "delivered"


class CamelModel(BaseModel):
    """Python field names, camelCase on the wire and in storage."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def dump(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class NewAccount(CamelModel):
    username: str
    password: str  # plaintext, compared as-is
    role: Role
    name: str


class Account(CamelModel):
    id: int
    username: str
    password: str
    role: Role
    name: str


class NewOrder(CamelModel):
    pickup_address: str
    dropoff_address: str
    bags: int = 1
    pickup_contact_name: str
    pickup_contact_phone: str
    dropoff_contact_name: str
    dropoff_contact_phone: str
    delivery_date: str
    delivery_time_slot: str


class Order(CamelModel):
    id: int
    pickup_address: str
    dropoff_address: str
    bags: int
    pickup_contact_name: str
    pickup_contact_phone: str
    dropoff_contact_name: str
    dropoff_contact_phone: str
    delivery_date: str
    delivery_time_slot: str
    status: OrderStatus = OrderStatus.NEW
    courier_id: Optional[int] = None
    signature: Optional[str] = None  # data URL
    proof_photo: Optional[str] = None  # data URL


# Storage codecs, one per stored key shape
ACCOUNTS = TypeAdapter(List[Account])
ORDERS = TypeAdapter(List[Order])
SESSION_ACCOUNT = TypeAdapter(Optional[Account])


def next_id(records: Iterable[Any]) -> int:
    return max((r.id for r in records), default=0) + 1
