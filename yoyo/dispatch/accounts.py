# yoyo/dispatch/accounts.py
from __future__ import annotations

import logging
import threading
from typing import Iterable, List, Optional

from ..seed import INITIAL_ACCOUNTS, STORAGE_KEY_USERS_LIST
from ..store import PersistentStore
from .records import ACCOUNTS, Account, NewAccount, Role, next_id

logger = logging.getLogger(__name__)


class IdentityDirectory:
    """Accounts known to the dashboard. Grows by append only."""

    def __init__(self, store: PersistentStore, seed: Iterable[Account] = INITIAL_ACCOUNTS) -> None:
        self._store = store
        self._lock = threading.RLock()
        self._accounts: List[Account] = store.load(STORAGE_KEY_USERS_LIST, list(seed), ACCOUNTS)

    @property
    def accounts(self) -> List[Account]:
        return list(self._accounts)

    def get(self, account_id: int) -> Optional[Account]:
        return next((a for a in self._accounts if a.id == account_id), None)

    def find_by_credentials(self, username: str, password: str) -> Optional[Account]:
        # First match wins; usernames are not required to be unique.
        return next(
            (a for a in self._accounts if a.username == username and a.password == password),
            None,
        )

    def couriers(self) -> List[Account]:
        return [a for a in self._accounts if a.role == Role.COURIER]

    def add(self, new_account: NewAccount) -> Account:
        with self._lock:
            account = Account(id=next_id(self._accounts), **new_account.model_dump())
            accounts = [*self._accounts, account]
            self._store.save(STORAGE_KEY_USERS_LIST, accounts, ACCOUNTS)
            self._accounts = accounts

        logger.info("Added account %s (%s, %s)", account.id, account.username, account.role.value)
        return account
