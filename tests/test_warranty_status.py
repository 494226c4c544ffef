"""Tests for warranty status derivation."""

from datetime import datetime, timedelta, timezone

from schemas.entities import Warranty, WarrantyStatus
from services.warranty_status import count_by_status, warranty_status

NOW = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)


def _warranty(ends_in: timedelta, **overrides):
    fields = {
        "id": "w1",
        "job_id": "j1",
        "warranty_days": 30,
        "start_date": NOW + ends_in - timedelta(days=30),
        "end_date": NOW + ends_in,
    }
    fields.update(overrides)
    return Warranty(**fields)


class TestWarrantyStatus:
    """Status priority: claimed, inactive, expired, expiring soon, active."""

    def test_active(self):
        assert warranty_status(_warranty(timedelta(days=10)), NOW) == WarrantyStatus.ACTIVE

    def test_expiring_soon(self):
        assert warranty_status(_warranty(timedelta(days=3)), NOW) == WarrantyStatus.EXPIRING_SOON

    def test_expiring_window_boundary(self):
        assert warranty_status(_warranty(timedelta(days=7)), NOW, expiring_days=7) == WarrantyStatus.EXPIRING_SOON
        assert warranty_status(_warranty(timedelta(days=7, seconds=1)), NOW, expiring_days=7) == WarrantyStatus.ACTIVE

    def test_expired(self):
        assert warranty_status(_warranty(timedelta(days=-1)), NOW) == WarrantyStatus.EXPIRED

    def test_expired_at_end_date(self):
        assert warranty_status(_warranty(timedelta(0)), NOW) == WarrantyStatus.EXPIRED

    def test_inactive(self):
        warranty = _warranty(timedelta(days=10), is_active=False)
        assert warranty_status(warranty, NOW) == WarrantyStatus.INACTIVE

    def test_claimed_wins_over_everything(self):
        warranty = _warranty(timedelta(days=-5), is_active=False, claim_date=NOW - timedelta(days=6))
        assert warranty_status(warranty, NOW) == WarrantyStatus.CLAIMED

    def test_custom_window(self):
        warranty = _warranty(timedelta(days=10))
        assert warranty_status(warranty, NOW, expiring_days=14) == WarrantyStatus.EXPIRING_SOON

    def test_naive_now_read_as_utc(self):
        warranty = _warranty(timedelta(days=10))
        assert warranty_status(warranty, NOW.replace(tzinfo=None)) == WarrantyStatus.ACTIVE


class TestCountByStatus:
    """Counts cover every status."""

    def test_counts(self):
        warranties = [
            _warranty(timedelta(days=10)),
            _warranty(timedelta(days=20)),
            _warranty(timedelta(days=2)),
            _warranty(timedelta(days=-2)),
        ]
        counts = count_by_status(warranties, NOW)
        assert counts == {
            "claimed": 0,
            "inactive": 0,
            "expired": 1,
            "expiring_soon": 1,
            "active": 2,
        }

    def test_empty(self):
        assert set(count_by_status([], NOW).values()) == {0}
