# yoyo/models.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text

from .db import Base


class KVRecord(Base):
    """One named record of the durable store: a key and its JSON text."""

    __tablename__ = "kv_records"
    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False, default="null")
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
