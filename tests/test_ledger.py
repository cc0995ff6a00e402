"""Tests for the order ledger and its status helpers."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy.exc import OperationalError

from yoyo.dispatch.errors import IllegalTransition
from yoyo.dispatch.ledger import OrderFilter, OrderLedger
from yoyo.dispatch.records import NewOrder, OrderStatus


def _new_order(**overrides) -> NewOrder:
    data = dict(
        pickup_address="הרצל 15, תל אביב",
        dropoff_address="בן יהודה 200, תל אביב",
        bags=1,
        pickup_contact_name="מאיה",
        pickup_contact_phone="052-5551234",
        dropoff_contact_name="דוד",
        dropoff_contact_phone="054-7778888",
        delivery_date="2024-08-01",
        delivery_time_slot="10:00-12:00",
    )
    data.update(overrides)
    return NewOrder(**data)


class TestLifecycleScenario:
    def test_new_order_through_delivery(self, store) -> None:
        ledger = OrderLedger(store, seed=[])

        order = ledger.add(_new_order())
        assert len(ledger.orders) == 1
        assert order.id == 1
        assert order.status == OrderStatus.NEW
        assert order.courier_id is None

        ledger.assign(1, 2)
        assert ledger.get(1).status == OrderStatus.ASSIGNED
        assert ledger.get(1).courier_id == 2

        ledger.advance_status(1, "in-progress")
        assert ledger.get(1).status == OrderStatus.IN_PROGRESS
        assert ledger.get(1).courier_id == 2

        ledger.record_proof(1, signature="x")
        delivered = ledger.get(1)
        assert delivered.status == OrderStatus.DELIVERED
        assert delivered.signature == "x"
        assert delivered.proof_photo is None

    def test_changes_survive_reload(self, store) -> None:
        ledger = OrderLedger(store)
        ledger.assign(1, 3)

        reloaded = OrderLedger(store)
        assert reloaded.get(1).status == OrderStatus.ASSIGNED
        assert reloaded.get(1).courier_id == 3


class TestAdd:
    def test_ids_strictly_increase(self, store) -> None:
        ledger = OrderLedger(store)
        ids = [ledger.add(_new_order()).id for _ in range(3)]
        assert ids == [6, 7, 8]

    def test_concurrent_adds_get_unique_ids(self, store) -> None:
        ledger = OrderLedger(store)
        with ThreadPoolExecutor(max_workers=8) as pool:
            ids = list(pool.map(lambda _: ledger.add(_new_order()).id, range(40)))

        assert sorted(ids) == list(range(6, 46))
        assert [o.id for o in OrderLedger(store).orders] == list(range(1, 46))

    def test_failed_write_leaves_ledger_intact(self, store, monkeypatch) -> None:
        ledger = OrderLedger(store)
        before = ledger.orders

        def boom(*args, **kwargs):
            raise OperationalError("UPDATE", {}, Exception("disk full"))

        monkeypatch.setattr(store, "save", boom)
        with pytest.raises(OperationalError):
            ledger.add(_new_order())

        assert ledger.orders == before


class TestUpdate:
    def test_unknown_id_is_a_noop(self, store, read_raw) -> None:
        ledger = OrderLedger(store)
        before = ledger.orders
        raw_before = read_raw("yo-yo-delivery-orders")

        ghost = before[0].model_copy(update={"id": 999, "status": OrderStatus.DELIVERED})
        ledger.update(ghost)

        assert ledger.orders == before
        assert read_raw("yo-yo-delivery-orders") == raw_before

    def test_replaces_in_place(self, store) -> None:
        ledger = OrderLedger(store)
        changed = ledger.get(2).model_copy(update={"bags": 9})
        ledger.update(changed)

        assert [o.id for o in ledger.orders] == [1, 2, 3, 4, 5]
        assert ledger.get(2).bags == 9

    def test_helpers_on_unknown_id_are_noops(self, store) -> None:
        ledger = OrderLedger(store)
        before = ledger.orders

        ledger.assign(999, 2)
        ledger.advance_status(999, OrderStatus.IN_PROGRESS)
        ledger.record_proof(999, signature="x")

        assert ledger.orders == before

    def test_any_status_accepted_by_default(self, store) -> None:
        ledger = OrderLedger(store)
        ledger.advance_status(1, OrderStatus.DELIVERED)
        assert ledger.get(1).status == OrderStatus.DELIVERED

    def test_record_proof_keeps_other_field(self, store) -> None:
        ledger = OrderLedger(store)
        ledger.record_proof(4, proof_photo="data:image/jpeg;base64,AAAA")

        order = ledger.get(4)
        assert order.status == OrderStatus.DELIVERED
        assert order.proof_photo == "data:image/jpeg;base64,AAAA"
        assert order.signature is None
        assert order.courier_id == 3


class TestFilter:
    def test_no_criteria_returns_everything_in_order(self, store) -> None:
        ledger = OrderLedger(store)
        assert ledger.filter() == ledger.orders
        assert ledger.filter(OrderFilter()) == ledger.orders
        assert ledger.filter(OrderFilter(delivery_date="", dropoff_contains="")) == ledger.orders

    def test_by_date(self, store) -> None:
        ledger = OrderLedger(store)
        assert [o.id for o in ledger.filter(OrderFilter(delivery_date="2024-07-28"))] == [1, 2]

    def test_by_courier(self, store) -> None:
        ledger = OrderLedger(store)
        assert [o.id for o in ledger.filter(OrderFilter(courier_id=2))] == [3, 5]

    def test_by_dropoff_substring(self, store) -> None:
        ledger = OrderLedger(store)
        assert [o.id for o in ledger.filter(OrderFilter(dropoff_contains="תל אביב"))] == [1, 2, 3, 4, 5]
        assert [o.id for o in ledger.filter(OrderFilter(dropoff_contains="רוטשילד"))] == [1]

    def test_criteria_are_anded(self, store) -> None:
        ledger = OrderLedger(store)
        criteria = OrderFilter(delivery_date="2024-07-29", courier_id=2)
        assert [o.id for o in ledger.filter(criteria)] == [3]
        criteria = OrderFilter(delivery_date="2024-07-28", courier_id=2)
        assert ledger.filter(criteria) == []


class TestStrictTransitions:
    def test_forward_path_allowed(self, store) -> None:
        ledger = OrderLedger(store, seed=[], strict=True)
        ledger.add(_new_order())

        ledger.assign(1, 2)
        ledger.advance_status(1, OrderStatus.IN_PROGRESS)
        ledger.record_proof(1, signature="sig")

        assert ledger.get(1).status == OrderStatus.DELIVERED

    def test_skipping_a_step_is_rejected(self, store) -> None:
        ledger = OrderLedger(store, strict=True)

        with pytest.raises(IllegalTransition) as exc_info:
            ledger.record_proof(1, signature="sig")

        assert exc_info.value.current == "new"
        assert exc_info.value.requested == "delivered"
        assert ledger.get(1).status == OrderStatus.NEW

    def test_reassigning_is_rejected(self, store) -> None:
        ledger = OrderLedger(store, strict=True)
        with pytest.raises(IllegalTransition):
            ledger.assign(3, 3)
        assert ledger.get(3).courier_id == 2

    def test_delivered_is_terminal(self, store) -> None:
        ledger = OrderLedger(store, strict=True)
        with pytest.raises(IllegalTransition):
            ledger.advance_status(5, OrderStatus.IN_PROGRESS)
