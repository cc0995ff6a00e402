# yoyo/dispatch/intake.py
"""Form models checked before anything reaches the ledger or directory."""
from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import Field, field_validator, model_validator

from ..seed import TIME_SLOTS
from .records import CamelModel, NewAccount, NewOrder, Role


def _required(v: str) -> str:
    if not (v or "").strip():
        raise ValueError("field is required")
    return v


class OrderForm(NewOrder):
    bags: int = Field(default=1, ge=1)

    @field_validator(
        "pickup_address",
        "dropoff_address",
        "pickup_contact_name",
        "pickup_contact_phone",
        "dropoff_contact_name",
        "dropoff_contact_phone",
        "delivery_date",
        "delivery_time_slot",
    )
    @classmethod
    def _not_blank(cls, v: str) -> str:
        return _required(v)

    @field_validator("delivery_date")
    @classmethod
    def _iso_date(cls, v: str) -> str:
        date.fromisoformat(v)
        return v

    @field_validator("delivery_time_slot")
    @classmethod
    def _known_slot(cls, v: str) -> str:
        if v not in TIME_SLOTS:
            raise ValueError(f"unknown time slot {v!r}")
        return v


class AccountForm(NewAccount):
    """Accounts a manager may create from the dispatch board."""

    role: Role = Role.CUSTOMER

    @field_validator("username", "password", "name")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        return _required(v)

    @field_validator("role")
    @classmethod
    def _no_managers(cls, v: Role) -> Role:
        if v == Role.MANAGER:
            raise ValueError("managers cannot be added from the dashboard")
        return v


class ProofForm(CamelModel):
    signature: Optional[str] = None
    proof_photo: Optional[str] = None

    @model_validator(mode="after")
    def _some_proof(self) -> "ProofForm":
        if not self.signature and not self.proof_photo:
            raise ValueError("a signature or a photo is required")
        return self
