"""Tests for the storage facades — local persistence, remote mirroring and fallback."""

import threading
import time
from datetime import date, datetime, timedelta, timezone

from schemas.entities import (
    Category, InventoryItemCreate, InventoryItemUpdate, PaymentMethod, SaleType,
)
from storage import build_storage
from storage.local_store import LocalStore


def _screen(**overrides):
    fields = {"name": "iPhone 12 Screen", "category": Category.SCREEN, "quantity": 5, "price": 89.0, "min_stock": 2}
    fields.update(overrides)
    return InventoryItemCreate(**fields)


def _sale(when, amount=50.0):
    return {
        "date": when,
        "type": SaleType.ACCESSORY_SALE,
        "description": "Case",
        "amount": amount,
        "payment_method": PaymentMethod.CASH,
    }


class TestLocalOnly:
    """Facades with no remote configured."""

    def test_add_assigns_id_and_timestamps(self, storage):
        item = storage.inventory.add(_screen())
        assert item.id
        assert item.created_at is not None
        assert [i.id for i in storage.inventory.get_all()] == [item.id]

    def test_adds_get_distinct_ids(self, storage):
        first = storage.inventory.add(_screen())
        second = storage.inventory.add(_screen())
        assert first.id != second.id

    def test_records_survive_restart(self, storage, local_store):
        item = storage.inventory.add(_screen())
        restarted = build_storage(local=LocalStore(local_store.directory, prefix="test_"))
        assert restarted.inventory.get(item.id).name == item.name

    def test_update_changes_only_given_fields(self, storage):
        item = storage.inventory.add(_screen())
        updated = storage.inventory.update(item.id, InventoryItemUpdate(quantity=1))

        assert updated.quantity == 1
        assert updated.name == item.name
        assert updated.price == item.price
        assert updated.created_at == item.created_at
        assert updated.updated_at > item.updated_at

    def test_repeated_updates_keep_advancing(self, storage):
        item = storage.inventory.add(_screen())
        first = storage.inventory.update(item.id, {"quantity": 4})
        second = storage.inventory.update(item.id, {"quantity": 3})
        assert second.updated_at > first.updated_at

    def test_update_unknown_id(self, storage):
        item = storage.inventory.add(_screen())
        assert storage.inventory.update("nope", {"quantity": 1}) is None
        assert storage.inventory.get(item.id).quantity == 5

    def test_invalid_update_rejected(self, storage):
        item = storage.inventory.add(_screen())
        assert storage.inventory.update(item.id, {"name": None}) is None
        assert storage.inventory.get(item.id).name == item.name

    def test_delete_is_idempotent(self, storage):
        item = storage.inventory.add(_screen())
        assert storage.inventory.delete(item.id) is True
        assert storage.inventory.delete(item.id) is True
        assert storage.inventory.get_all() == []

    def test_low_stock(self, storage):
        at_min = storage.inventory.add(_screen(name="At min", quantity=2, min_stock=2))
        storage.inventory.add(_screen(name="Above min", quantity=3, min_stock=2))
        assert [i.id for i in storage.inventory.low_stock()] == [at_min.id]


class TestSalesByDate:
    """Sales are matched by the UTC calendar day of their date."""

    def test_get_by_date(self, storage):
        storage.sales.add(_sale(datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)))
        storage.sales.add(_sale(datetime(2024, 5, 1, 23, 30, tzinfo=timezone.utc)))
        storage.sales.add(_sale(datetime(2024, 5, 2, 0, 10, tzinfo=timezone.utc)))

        assert len(storage.sales.get_by_date("2024-05-01")) == 2
        assert len(storage.sales.get_by_date(date(2024, 5, 1))) == 2
        assert len(storage.sales.get_by_date(datetime(2024, 5, 2, 15, 0))) == 1
        assert storage.sales.get_by_date("2024-05-03") == []

    def test_offset_dates_use_utc_day(self, storage):
        storage.sales.add(_sale(datetime(2024, 5, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5)))))
        assert storage.sales.get_by_date("2024-05-01") == []
        assert len(storage.sales.get_by_date("2024-05-02")) == 1

    def test_same_day_from_either_backend(self, remote_storage, break_remote):
        remote_storage.sales.add(_sale(datetime(2024, 5, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5)))))
        assert len(remote_storage.sales.get_by_date("2024-05-02")) == 1

        break_remote()
        assert len(remote_storage.sales.get_by_date("2024-05-02")) == 1


class TestWarrantyClaims:
    """Claims go through claim(), and a claimed warranty cannot be re-activated."""

    def _warranty(self, storage):
        now = datetime.now(timezone.utc)
        return storage.warranties.add({
            "job_id": "j1",
            "warranty_days": 30,
            "start_date": now,
            "end_date": now + timedelta(days=30),
        })

    def test_claim_deactivates(self, storage):
        warranty = self._warranty(storage)
        claimed = storage.warranties.claim(warranty.id, "Screen flicker")
        assert claimed.is_active is False
        assert claimed.claim_reason == "Screen flicker"
        assert claimed.claim_date is not None

    def test_claimed_warranty_stays_inactive(self, storage):
        warranty = self._warranty(storage)
        storage.warranties.claim(warranty.id, "Screen flicker")

        updated = storage.warranties.update(warranty.id, {"is_active": True, "claim_date": None, "work_done": "Reglued"})
        assert updated.is_active is False
        assert updated.claim_date is not None
        assert updated.work_done == "Reglued"

    def test_update_cannot_record_claim(self, storage):
        warranty = self._warranty(storage)
        updated = storage.warranties.update(warranty.id, {"claim_date": datetime.now(timezone.utc), "claim_reason": "x"})
        assert updated.claim_date is None
        assert updated.claim_reason is None
        assert updated.is_active is True


class TestRemoteMirroring:
    """Remote reads and writes are mirrored into the local store."""

    def test_add_goes_remote_and_local(self, remote_storage):
        item = remote_storage.inventory.add(_screen())
        assert [i.id for i in remote_storage.inventory.primary.get_all()] == [item.id]
        assert [i.id for i in remote_storage.inventory.fallback.get_all()] == [item.id]

    def test_read_replaces_local_copy(self, remote_storage):
        remote_storage.inventory.fallback.add(_screen(name="Stale local"))
        remote_storage.inventory.primary.add(_screen(name="Remote"))

        assert [i.name for i in remote_storage.inventory.get_all()] == ["Remote"]
        assert [i.name for i in remote_storage.inventory.fallback.get_all()] == ["Remote"]

    def test_update_mirrored(self, remote_storage):
        item = remote_storage.inventory.add(_screen())
        remote_storage.inventory.update(item.id, {"quantity": 2})
        assert remote_storage.inventory.fallback.get(item.id).quantity == 2

    def test_update_of_local_only_record(self, remote_storage):
        item = remote_storage.inventory.fallback.add(_screen())
        updated = remote_storage.inventory.update(item.id, {"quantity": 2})
        assert updated.quantity == 2

    def test_delete_removes_both(self, remote_storage):
        item = remote_storage.inventory.add(_screen())
        assert remote_storage.inventory.delete(item.id) is True
        assert remote_storage.inventory.primary.get_all() == []
        assert remote_storage.inventory.fallback.get_all() == []


class TestFallback:
    """The local copy is served when the remote fails or has nothing."""

    def test_remote_failure_serves_local_copy(self, remote_storage, break_remote):
        item = remote_storage.inventory.add(_screen())
        break_remote()

        assert [i.id for i in remote_storage.inventory.get_all()] == [item.id]
        assert [i.id for i in remote_storage.inventory.fallback.get_all()] == [item.id]

    def test_remote_failure_on_add_stores_locally(self, remote_storage, break_remote):
        break_remote()
        item = remote_storage.inventory.add(_screen())
        assert item is not None
        assert [i.id for i in remote_storage.inventory.get_all()] == [item.id]

    def test_empty_remote_serves_local_copy(self, remote_storage):
        item = remote_storage.inventory.fallback.add(_screen())
        assert [i.id for i in remote_storage.inventory.get_all()] == [item.id]

    def test_empty_remote_trusted(self, local_store, session_factory):
        trusting = build_storage(local=local_store, session_factory=session_factory, trust_empty_remote=True)
        trusting.inventory.fallback.add(_screen())

        assert trusting.inventory.get_all() == []
        assert trusting.inventory.fallback.get_all() == []


class SlowLocalStore(LocalStore):
    """Widens the gap between reading and writing a collection."""

    def read(self, key):
        records = super().read(key)
        time.sleep(0.05)
        return records


class TestConcurrency:
    """Concurrent writers to one collection do not lose records."""

    def test_concurrent_adds_both_kept(self, tmp_path):
        storage = build_storage(local=SlowLocalStore(tmp_path), trust_empty_remote=False)

        threads = [
            threading.Thread(target=storage.inventory.add, args=(_screen(name=f"Item {n}"),))
            for n in range(2)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(i.name for i in storage.inventory.get_all()) == ["Item 0", "Item 1"]
