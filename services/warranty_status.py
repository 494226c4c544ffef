"""Warranty status derivation."""

from collections import Counter
from datetime import datetime, timedelta

from config import settings
from schemas.entities import Warranty, WarrantyStatus, as_utc, utcnow


def warranty_status(
    warranty: Warranty,
    now: datetime | None = None,
    expiring_days: int | None = None,
) -> WarrantyStatus:
    """
    Status of a warranty at ``now``. Checks run in priority order and the
    first match wins:

    1. claimed (terminal)
    2. inactive
    3. expired: end date reached
    4. expiring_soon: ends within ``expiring_days`` (default 7)
    5. active
    """
    now = as_utc(now or utcnow())
    window = timedelta(days=settings.WARRANTY_EXPIRING_DAYS if expiring_days is None else expiring_days)
    end = as_utc(warranty.end_date)

    if warranty.claim_date is not None:
        return WarrantyStatus.CLAIMED
    if not warranty.is_active:
        return WarrantyStatus.INACTIVE
    if end <= now:
        return WarrantyStatus.EXPIRED
    if end - now <= window:
        return WarrantyStatus.EXPIRING_SOON
    return WarrantyStatus.ACTIVE


def count_by_status(warranties: list[Warranty], now: datetime | None = None) -> dict[str, int]:
    """Number of warranties in each status, every status present."""
    now = now or utcnow()
    counts = Counter(warranty_status(w, now) for w in warranties)
    return {status.value: counts.get(status, 0) for status in WarrantyStatus}
