# yoyo/store.py
"""Durable key-value store.

Each key holds one whole JSON document in the ``kv_records`` table. Reads that
fail (missing row, bad JSON, a record that no longer validates, a database
error) are reported on this module's logger and treated as "absent"; callers
never see them.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .models import KVRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

_ANY: TypeAdapter[Any] = TypeAdapter(Any)


class PersistentStore:
    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get(self, key: str, adapter: TypeAdapter[T] = _ANY) -> Optional[T]:
        """Stored value for ``key``, or None when absent or unreadable."""
        try:
            with self._session_factory() as db:
                rec = db.get(KVRecord, key)
                raw = rec.value if rec else None
        except SQLAlchemyError as e:
            logger.error("Failed to read key %s from store: %s", key, e)
            return None

        if not raw:
            return None

        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            logger.error("Failed to parse data for key %s from store: %s", key, e)
            return None

    def load(self, key: str, seed: T, adapter: TypeAdapter[T] = _ANY) -> T:
        """Stored value for ``key``; otherwise write ``seed`` and return it."""
        value = self.get(key, adapter)
        if value is not None:
            return value

        try:
            self.save(key, seed, adapter)
        except SQLAlchemyError as e:
            logger.error("Failed to seed key %s in store: %s", key, e)
        return seed

    def save(self, key: str, value: T, adapter: TypeAdapter[T] = _ANY) -> None:
        payload = adapter.dump_json(value, by_alias=True, exclude_none=True).decode("utf-8")
        with self._session_factory() as db:
            rec = db.get(KVRecord, key)
            if rec is None:
                db.add(KVRecord(key=key, value=payload))
            else:
                rec.value = payload
            db.commit()

    def remove(self, key: str) -> None:
        with self._session_factory() as db:
            rec = db.get(KVRecord, key)
            if rec is not None:
                db.delete(rec)
                db.commit()
