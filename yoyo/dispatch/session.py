# yoyo/dispatch/session.py
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from ..seed import STORAGE_KEY_USER
from ..store import PersistentStore
from .accounts import IdentityDirectory
from .errors import InvalidCredentials
from .records import SESSION_ACCOUNT, Account, Role

logger = logging.getLogger(__name__)


class View(str, Enum):
    LOGIN = "login"
    INTAKE = "intake"
    DISPATCH = "dispatch"
    DELIVERY = "delivery"


_VIEW_BY_ROLE = {
    Role.CUSTOMER: View.INTAKE,
    Role.MANAGER: View.DISPATCH,
    Role.COURIER: View.DELIVERY,
}


def select_view(account: Optional[Account]) -> View:
    if account is None:
        return View.LOGIN
    return _VIEW_BY_ROLE[account.role]


class Session:
    """The one signed-in account, restored from the store on start."""

    def __init__(self, store: PersistentStore, directory: IdentityDirectory) -> None:
        self._store = store
        self._directory = directory
        self._current: Optional[Account] = store.get(STORAGE_KEY_USER, SESSION_ACCOUNT)

    @property
    def current(self) -> Optional[Account]:
        return self._current

    @property
    def view(self) -> View:
        return select_view(self._current)

    def login(self, username: str, password: str) -> Account:
        account = self._directory.find_by_credentials(username, password)
        if account is None:
            logger.info("Login rejected for %r", username)
            raise InvalidCredentials(username)

        self._store.save(STORAGE_KEY_USER, account, SESSION_ACCOUNT)
        self._current = account
        logger.info("Logged in %s as %s", account.username, account.role.value)
        return account

    def logout(self) -> None:
        if self._current is not None:
            logger.info("Logged out %s", self._current.username)
        self._current = None
        self._store.remove(STORAGE_KEY_USER)
