"""Sales reports and daily summaries computed from stored records."""

import logging
from datetime import date, datetime, timedelta

from schemas.entities import (
    DailySale, DailySummary, Job, PaymentBreakdown, PaymentMethod, SaleType, as_utc, utcnow,
)
from schemas.workflow import Breakdown, DailyPoint, SalesReport

logger = logging.getLogger(__name__)

PERIOD_DAYS = {"week": 7, "month": 30, "year": 365}


def _revenue(sales: list[DailySale]) -> float:
    return sum(s.amount for s in sales)


def _breakdown(sales: list[DailySale]) -> Breakdown:
    return Breakdown(count=len(sales), revenue=_revenue(sales))


def _growth(current: float, previous: float) -> int:
    """Percentage change; 100 when there was nothing before and something now."""
    if previous == 0:
        return 100 if current > 0 else 0
    return round((current - previous) / previous * 100)


def sales_report(sales: list[DailySale], period: str = "week", now: datetime | None = None) -> SalesReport:
    """
    Revenue metrics for the trailing ``period`` (week, month or year).

    Includes totals, breakdowns by sale type and payment method, a
    last-7-days series and growth against the previous period of equal length.
    """
    if period not in PERIOD_DAYS:
        raise ValueError(f"Unknown report period '{period}'")

    now = as_utc(now or utcnow())
    start = now - timedelta(days=PERIOD_DAYS[period])
    previous_start = start - (now - start)

    current = [s for s in sales if as_utc(s.date) >= start]
    previous = [s for s in sales if previous_start <= as_utc(s.date) < start]

    total_revenue = _revenue(current)
    total_sales = len(current)

    by_type = {t.value: _breakdown([s for s in current if s.type == t]) for t in SaleType}
    by_payment = {m.value: _breakdown([s for s in current if s.payment_method == m]) for m in PaymentMethod}

    daily = []
    for offset in range(6, -1, -1):
        day = (now - timedelta(days=offset)).date()
        day_sales = [s for s in current if as_utc(s.date).date() == day]
        daily.append(DailyPoint(date=day.isoformat(), sales=len(day_sales), revenue=_revenue(day_sales)))

    logger.info(f"Sales report ({period}): {total_sales} sales, ${total_revenue:.2f}")

    return SalesReport(
        period=period,
        total_revenue=total_revenue,
        total_sales=total_sales,
        average_sale=total_revenue / total_sales if total_sales else 0.0,
        by_type=by_type,
        by_payment=by_payment,
        daily=daily,
        growth=_growth(total_revenue, _revenue(previous)),
    )


def daily_summary(sales: list[DailySale], jobs: list[Job], day: date) -> DailySummary:
    """Totals for one calendar day: sales, jobs started, revenue by payment method."""
    day_sales = [s for s in sales if as_utc(s.date).date() == day]
    day_jobs = [j for j in jobs if as_utc(j.start_date).date() == day]

    breakdown = PaymentBreakdown(
        cash=_revenue([s for s in day_sales if s.payment_method == PaymentMethod.CASH]),
        card=_revenue([s for s in day_sales if s.payment_method == PaymentMethod.CARD]),
        transfer=_revenue([s for s in day_sales if s.payment_method == PaymentMethod.TRANSFER]),
    )
    return DailySummary(
        date=day.isoformat(),
        total_sales=len(day_sales),
        total_jobs=len(day_jobs),
        total_revenue=_revenue(day_sales),
        payment_breakdown=breakdown,
    )
