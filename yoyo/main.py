# yoyo/main.py
from __future__ import annotations

import logging
import os
import threading
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Query, Request
from pydantic import BaseModel

# Load .env locally (safe in prod too)
load_dotenv()

from .dispatch.errors import InvalidCredentials
from .dispatch.geocode import geocode, route_preview
from .dispatch.intake import AccountForm, OrderForm, ProofForm
from .dispatch.ledger import OrderFilter
from .dispatch.lifecycle import can_transition
from .dispatch.records import Account, CamelModel, Order, OrderStatus, Role
from .dispatch.session import View
from .state import AppState


# -------------------
# Config (env-driven)
# -------------------
class Settings(BaseModel):
    database_url: str = os.getenv("DATABASE_URL", "").strip()
    strict_transitions: bool = os.getenv("YOYO_STRICT_TRANSITIONS", "0").strip().lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))


settings = Settings()


def configure_logging(level: str = settings.log_level) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="YO-YO Deliveries API",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

_state_lock = threading.Lock()


# -------------------
# Schemas
# -------------------
class LoginIn(BaseModel):
    username: str
    password: str


class AssignIn(CamelModel):
    courier_id: int


# -------------------
# Helpers
# -------------------
def get_state(request: Request) -> AppState:
    state = getattr(request.app.state, "yoyo", None)
    if state is not None:
        return state

    with _state_lock:
        state = getattr(request.app.state, "yoyo", None)
        if state is None:
            state = AppState.from_url(
                settings.database_url or None,
                strict_transitions=settings.strict_transitions,
            )
            logger.info("Store opened (strict transitions: %s)", settings.strict_transitions)
            request.app.state.yoyo = state
    return state


def _public(account: Account) -> Dict[str, Any]:
    return account.model_dump(by_alias=True, mode="json", exclude={"password"})


def _criteria(delivery_date: str | None, courier_id: int | None, city: str | None) -> OrderFilter:
    return OrderFilter(delivery_date=delivery_date, courier_id=courier_id, dropoff_contains=city)


def require_view(state: AppState, view: View) -> Account:
    """Only the role whose view offers an action may trigger it."""
    if state.session.view != view:
        raise HTTPException(status_code=403, detail=f"Not available from the {state.session.view.value} view")
    return state.session.current


def _get_order(state: AppState, order_id: int) -> Order:
    order = state.ledger.get(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


def _require_step(order: Order, target: OrderStatus) -> None:
    if not can_transition(order.status, target):
        raise HTTPException(
            status_code=409,
            detail=f"Order {order.id} is {order.status.value}, cannot move to {target.value}",
        )


def _require_own(order: Order, courier: Account) -> None:
    if order.courier_id != courier.id:
        raise HTTPException(status_code=403, detail="Order is not assigned to you")


# -------------------
# Health
# -------------------
@app.get("/")
def root():
    return {"ok": True, "service": "yoyo-deliveries"}


# -------------------
# Session
# -------------------
@app.post("/auth/login")
def login(payload: LoginIn, state: AppState = Depends(get_state)):
    with state.lock:
        try:
            account = state.session.login(payload.username, payload.password)
        except InvalidCredentials:
            raise HTTPException(status_code=401, detail="Bad credentials")
        return {"ok": True, "user": _public(account), "view": state.session.view.value}


@app.post("/auth/logout")
def logout(state: AppState = Depends(get_state)):
    with state.lock:
        state.session.logout()
        return {"ok": True, "view": state.session.view.value}


@app.get("/view")
def current_view(
    delivery_date: Optional[str] = Query(default=None, alias="date"),
    courier_id: Optional[int] = Query(default=None, alias="courier"),
    city: Optional[str] = None,
    state: AppState = Depends(get_state),
):
    return state.current_view(_criteria(delivery_date, courier_id, city))


# -------------------
# Map
# -------------------
@app.get("/geocode")
def geocode_address(address: str = ""):
    coords = geocode(address)
    return {"address": address, "coords": list(coords) if coords else None}


@app.get("/route")
def route(pickup: str = "", dropoff: str = "", state: AppState = Depends(get_state)):
    require_view(state, View.INTAKE)
    return route_preview(pickup, dropoff).model_dump()


# -------------------
# Customer intake
# -------------------
@app.post("/orders")
def create_order(payload: OrderForm, state: AppState = Depends(get_state)):
    with state.lock:
        require_view(state, View.INTAKE)
        order = state.ledger.add(payload)
    return {"ok": True, "order": order.dump()}


# -------------------
# Dispatch board (manager)
# -------------------
@app.get("/orders")
def list_orders(
    delivery_date: Optional[str] = Query(default=None, alias="date"),
    courier_id: Optional[int] = Query(default=None, alias="courier"),
    city: Optional[str] = None,
    state: AppState = Depends(get_state),
) -> List[Dict[str, Any]]:
    require_view(state, View.DISPATCH)
    return [o.dump() for o in state.ledger.filter(_criteria(delivery_date, courier_id, city))]


@app.post("/accounts")
def create_account(payload: AccountForm, state: AppState = Depends(get_state)):
    with state.lock:
        require_view(state, View.DISPATCH)
        account = state.directory.add(payload)
    return {"ok": True, "user": _public(account)}


@app.post("/orders/{order_id}/assign")
def assign_courier(order_id: int, payload: AssignIn, state: AppState = Depends(get_state)):
    with state.lock:
        require_view(state, View.DISPATCH)
        order = _get_order(state, order_id)
        _require_step(order, OrderStatus.ASSIGNED)

        courier = state.directory.get(payload.courier_id)
        if not courier or courier.role != Role.COURIER:
            raise HTTPException(status_code=400, detail="Unknown courier")

        state.ledger.assign(order_id, courier.id)
        return {"ok": True, "order": state.ledger.get(order_id).dump()}


# -------------------
# Delivery workflow (courier)
# -------------------
@app.post("/orders/{order_id}/start")
def start_delivery(order_id: int, state: AppState = Depends(get_state)):
    with state.lock:
        courier = require_view(state, View.DELIVERY)
        order = _get_order(state, order_id)
        _require_own(order, courier)
        _require_step(order, OrderStatus.IN_PROGRESS)

        state.ledger.advance_status(order_id, OrderStatus.IN_PROGRESS)
        return {"ok": True, "order": state.ledger.get(order_id).dump()}


@app.post("/orders/{order_id}/deliver")
def confirm_delivery(order_id: int, payload: ProofForm, state: AppState = Depends(get_state)):
    with state.lock:
        courier = require_view(state, View.DELIVERY)
        order = _get_order(state, order_id)
        _require_own(order, courier)
        _require_step(order, OrderStatus.DELIVERED)

        state.ledger.record_proof(
            order_id,
            signature=payload.signature or None,
            proof_photo=payload.proof_photo or None,
        )
        return {"ok": True, "order": state.ledger.get(order_id).dump()}


def run() -> None:
    import uvicorn

    uvicorn.run("yoyo.main:app", host=settings.host, port=settings.port)
