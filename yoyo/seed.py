# yoyo/seed.py
"""Storage keys and the demo data written on first access."""
from __future__ import annotations

from typing import List

from .dispatch.records import Account, Order, OrderStatus, Role

STORAGE_KEY_ORDERS = "yo-yo-delivery-orders"
STORAGE_KEY_USER = "yo-yo-delivery-user"
STORAGE_KEY_USERS_LIST = "yo-yo-delivery-users-list"

TIME_SLOTS: List[str] = ["10:00-12:00", "12:00-14:00", "14:00-16:00", "16:00-18:00"]

_BLANK_PNG = (
    "data:image/png;base64,"
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAACklEQVR42mP8/wcAAwAB/epv2AAAAABJRU5ErkJggg=="
)

INITIAL_ACCOUNTS: List[Account] = [
    Account(id=1, username="manager", password="123", role=Role.MANAGER, name="אבי מנהל"),
    Account(id=2, username="courier1", password="123", role=Role.COURIER, name="יוסי שליח"),
    Account(id=3, username="courier2", password="123", role=Role.COURIER, name="משה שליח"),
    Account(id=4, username="customer", password="123", role=Role.CUSTOMER, name="לקוח לדוגמה"),
]

MOCK_ORDERS: List[Order] = [
    Order(
        id=1,
        pickup_address="אלנבי 1, תל אביב",
        dropoff_address="רוטשילד 10, תל אביב",
        bags=1,
        pickup_contact_name="דנה",
        pickup_contact_phone="050-1111111",
        dropoff_contact_name="יעל",
        dropoff_contact_phone="050-2222222",
        delivery_date="2024-07-28",
        delivery_time_slot="10:00-12:00",
        status=OrderStatus.NEW,
    ),
    Order(
        id=2,
        pickup_address="דיזנגוף 100, תל אביב",
        dropoff_address="אבן גבירול 50, תל אביב",
        bags=3,
        pickup_contact_name="ישראל",
        pickup_contact_phone="053-9876543",
        dropoff_contact_name="ישראל",
        dropoff_contact_phone="053-9876543",
        delivery_date="2024-07-28",
        delivery_time_slot="12:00-14:00",
        status=OrderStatus.NEW,
    ),
    Order(
        id=3,
        pickup_address="הרצל 15, תל אביב",
        dropoff_address="קינג ג'ורג' 30, תל אביב",
        bags=1,
        pickup_contact_name="מאיה",
        pickup_contact_phone="052-5551234",
        dropoff_contact_name="מאיה",
        dropoff_contact_phone="052-5551234",
        delivery_date="2024-07-29",
        delivery_time_slot="14:00-16:00",
        status=OrderStatus.ASSIGNED,
        courier_id=2,
    ),
    Order(
        id=4,
        pickup_address="יהודה הלוי 40, תל אביב",
        dropoff_address="בן יהודה 200, תל אביב",
        bags=5,
        pickup_contact_name="דוד",
        pickup_contact_phone="054-7778888",
        dropoff_contact_name="גוליית",
        dropoff_contact_phone="054-7779999",
        delivery_date="2024-07-29",
        delivery_time_slot="16:00-18:00",
        status=OrderStatus.IN_PROGRESS,
        courier_id=3,
    ),
    Order(
        id=5,
        pickup_address="המסגר 58, תל אביב",
        dropoff_address="אחד העם 1, תל אביב",
        bags=1,
        pickup_contact_name="רינה",
        pickup_contact_phone="058-2345678",
        dropoff_contact_name="רינה",
        dropoff_contact_phone="058-2345678",
        delivery_date="2024-07-27",
        delivery_time_slot="10:00-12:00",
        status=OrderStatus.DELIVERED,
        courier_id=2,
        signature=_BLANK_PNG,
    ),
]
