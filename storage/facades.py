"""Per-entity storage facades used by the workflows and the API."""

import logging
from datetime import date, datetime

from dateutil import parser as date_parser

from schemas.entities import InventoryItem, Job, Warranty, DailySale, as_utc, utcnow
from storage.repositories import FallbackRepository, Fields, as_fields

logger = logging.getLogger(__name__)


class InventoryStorage(FallbackRepository[InventoryItem]):
    def low_stock(self) -> list[InventoryItem]:
        return [item for item in self.get_all() if item.is_low_stock]


class JobStorage(FallbackRepository[Job]):
    pass


class WarrantyStorage(FallbackRepository[Warranty]):
    """Warranties. Claims are recorded only through ``claim``, and a claimed
    warranty stays inactive for good."""

    def update(self, record_id: str, fields: Fields) -> Warranty | None:
        changes = as_fields(fields, partial=True)
        blocked = [name for name in ("claim_date", "claim_reason") if name in changes]
        if "is_active" in changes:
            current = self.fallback.get(record_id) or self.get(record_id)
            if current is not None and current.claim_date is not None:
                blocked.append("is_active")
        for name in blocked:
            changes.pop(name)
        if blocked:
            logger.warning(f"Ignoring {blocked} on warranty {record_id}")
        return super().update(record_id, changes)

    def claim(self, record_id: str, reason: str, when: datetime | None = None) -> Warranty | None:
        return super().update(record_id, {
            "claim_date": when or utcnow(),
            "claim_reason": reason,
            "is_active": False,
        })


def _calendar_day(value: str | date | datetime) -> date:
    if isinstance(value, datetime):
        return as_utc(value).date()
    if isinstance(value, date):
        return value
    return date_parser.parse(value).date()


class SalesStorage(FallbackRepository[DailySale]):
    def get_by_date(self, day: str | date | datetime) -> list[DailySale]:
        """Sales whose date falls on the same calendar day, in UTC."""
        target = _calendar_day(day)
        return [sale for sale in self.get_all() if as_utc(sale.date).date() == target]
