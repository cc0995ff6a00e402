"""Tests for the session and role-based view selection."""
from __future__ import annotations

import pytest

from yoyo.dispatch.accounts import IdentityDirectory
from yoyo.dispatch.errors import InvalidCredentials
from yoyo.dispatch.records import Account, Role
from yoyo.dispatch.session import Session, View, select_view
from yoyo.seed import STORAGE_KEY_USER


@pytest.fixture
def directory(store) -> IdentityDirectory:
    return IdentityDirectory(store)


@pytest.mark.parametrize(
    "role, view",
    [
        (Role.CUSTOMER, View.INTAKE),
        (Role.MANAGER, View.DISPATCH),
        (Role.COURIER, View.DELIVERY),
    ],
)
def test_select_view(role: Role, view: View) -> None:
    account = Account(id=1, username="u", password="p", role=role, name="U")
    assert select_view(account) == view


def test_no_account_means_login() -> None:
    assert select_view(None) == View.LOGIN


class TestSession:
    def test_starts_logged_out(self, store, directory) -> None:
        session = Session(store, directory)
        assert session.current is None
        assert session.view == View.LOGIN

    def test_login_persists_pointer(self, store, directory, read_raw) -> None:
        session = Session(store, directory)
        account = session.login("courier1", "123")

        assert account.id == 2
        assert session.view == View.DELIVERY
        assert read_raw(STORAGE_KEY_USER) is not None

        restored = Session(store, directory)
        assert restored.current == account

    def test_bad_credentials_change_nothing(self, store, directory, read_raw) -> None:
        session = Session(store, directory)
        session.login("customer", "123")
        pointer = read_raw(STORAGE_KEY_USER)

        with pytest.raises(InvalidCredentials):
            session.login("manager", "wrong")

        assert session.current.username == "customer"
        assert read_raw(STORAGE_KEY_USER) == pointer

    def test_logout_removes_pointer(self, store, directory, read_raw) -> None:
        session = Session(store, directory)
        session.login("manager", "123")
        session.logout()

        assert session.current is None
        assert session.view == View.LOGIN
        assert read_raw(STORAGE_KEY_USER) is None
        assert Session(store, directory).current is None

    def test_corrupt_pointer_means_logged_out(self, store, directory, write_raw, read_raw) -> None:
        write_raw(STORAGE_KEY_USER, "{oops")
        session = Session(store, directory)

        assert session.current is None
        # the pointer is never seeded
        assert read_raw(STORAGE_KEY_USER) == "{oops"
