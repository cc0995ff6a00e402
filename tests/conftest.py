from __future__ import annotations

from typing import Any, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from yoyo.db import init_db, make_engine, make_session_factory
from yoyo.main import app, get_state
from yoyo.models import KVRecord
from yoyo.state import AppState
from yoyo.store import PersistentStore


@pytest.fixture
def session_factory(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'yoyo-test.db'}")
    init_db(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def store(session_factory) -> PersistentStore:
    return PersistentStore(session_factory)


@pytest.fixture
def write_raw(session_factory):
    """Put arbitrary text under a key, bypassing the store's encoder."""

    def _write(key: str, text: str) -> None:
        with session_factory() as db:
            rec = db.get(KVRecord, key)
            if rec is None:
                db.add(KVRecord(key=key, value=text))
            else:
                rec.value = text
            db.commit()

    return _write


@pytest.fixture
def read_raw(session_factory):
    """Text stored under a key, or None when the row is missing."""

    def _read(key: str) -> Optional[str]:
        with session_factory() as db:
            rec = db.get(KVRecord, key)
            return rec.value if rec else None

    return _read


@pytest.fixture
def state(store) -> AppState:
    return AppState(store)


@pytest.fixture
def client(state):
    app.dependency_overrides[get_state] = lambda: state
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def order_payload() -> Dict[str, Any]:
    return {
        "pickupAddress": "אלנבי 1, תל אביב",
        "dropoffAddress": "רוטשילד 10, תל אביב",
        "bags": 2,
        "pickupContactName": "דנה",
        "pickupContactPhone": "050-1111111",
        "dropoffContactName": "יעל",
        "dropoffContactPhone": "050-2222222",
        "deliveryDate": "2024-08-01",
        "deliveryTimeSlot": "12:00-14:00",
    }
