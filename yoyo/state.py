# yoyo/state.py
# Everything the dashboard keeps between requests, owned by one object
# instead of module globals. The store is the only thing that touches disk.
from __future__ import annotations

import threading
from typing import Any, Dict, Optional

from .db import init_db, make_engine, make_session_factory
from .dispatch.accounts import IdentityDirectory
from .dispatch.ledger import OrderFilter, OrderLedger
from .dispatch.session import Session, View
from .dispatch.views import delivery_view, dispatch_view, intake_view, login_view
from .store import PersistentStore


class AppState:
    def __init__(self, store: PersistentStore, strict_transitions: bool = False) -> None:
        self.store = store
        self.directory = IdentityDirectory(store)
        self.ledger = OrderLedger(store, strict=strict_transitions)
        self.session = Session(store, self.directory)
        # Held by request handlers across a check and the mutation it guards.
        self.lock = threading.RLock()

    @classmethod
    def from_url(cls, url: Optional[str] = None, strict_transitions: bool = False) -> AppState:
        engine = make_engine(url)
        init_db(engine)
        return cls(PersistentStore(make_session_factory(engine)), strict_transitions=strict_transitions)

    def current_view(self, criteria: Optional[OrderFilter] = None) -> Dict[str, Any]:
        account = self.session.current
        view = self.session.view

        if view == View.INTAKE:
            return intake_view(account)
        if view == View.DISPATCH:
            return dispatch_view(account, self.ledger, self.directory, criteria)
        if view == View.DELIVERY:
            return delivery_view(account, self.ledger)
        return login_view()
