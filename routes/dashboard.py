"""Dashboard and report API routes."""

import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query

from schemas.entities import DailySummary, JobStatus, WarrantyStatus, utcnow
from schemas.workflow import DashboardSummary, SalesReport
from services.reports import PERIOD_DAYS, daily_summary, sales_report
from services.warranty_status import count_by_status, warranty_status
from storage import Storage, get_storage

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard/summary", response_model=DashboardSummary)
def get_dashboard_summary(storage: Storage = Depends(get_storage)):
    """Get overview metrics for the dashboard."""
    now = utcnow()

    # Sales today
    today_sales = storage.sales.get_by_date(now)

    # Open jobs and recent jobs
    jobs = storage.jobs.get_all()
    open_jobs = [j for j in jobs if j.status in (JobStatus.PENDING, JobStatus.IN_PROGRESS)]
    recent = sorted(jobs, key=lambda j: j.start_date, reverse=True)[:10]
    recent_jobs = [
        {
            "id": j.id,
            "clientName": j.client_name,
            "device": j.device_info,
            "status": j.status.value,
            "startDate": j.start_date.isoformat(),
        }
        for j in recent
    ]

    # Low stock items
    low_stock_items = [
        {"id": i.id, "name": i.name, "quantity": i.quantity, "minStock": i.min_stock}
        for i in storage.inventory.low_stock()
    ]

    # Warranties
    warranties = storage.warranties.get_all()
    expiring = [w for w in warranties if warranty_status(w, now) == WarrantyStatus.EXPIRING_SOON]
    expiring_warranties = [
        {
            "id": w.id,
            "clientName": w.client_name,
            "deviceInfo": w.device_info,
            "endDate": w.end_date.isoformat(),
        }
        for w in sorted(expiring, key=lambda w: w.end_date)
    ]

    return DashboardSummary(
        revenue_today=sum(s.amount for s in today_sales),
        sales_today=len(today_sales),
        open_jobs=len(open_jobs),
        low_stock_items=low_stock_items,
        warranty_counts=count_by_status(warranties, now),
        expiring_warranties=expiring_warranties,
        recent_jobs=recent_jobs,
        remote_enabled=storage.remote.enabled,
    )


@router.get("/reports/sales", response_model=SalesReport)
def get_sales_report(period: str = "week", storage: Storage = Depends(get_storage)):
    """Sales metrics for the last week, month or year."""
    if period not in PERIOD_DAYS:
        raise HTTPException(status_code=422, detail=f"period must be one of {sorted(PERIOD_DAYS)}")
    return sales_report(storage.sales.get_all(), period)


@router.get("/reports/daily", response_model=DailySummary)
def get_daily_summary(
    day: date | None = Query(default=None, alias="date"),
    storage: Storage = Depends(get_storage),
):
    """Totals for one calendar day, today by default."""
    day = day or utcnow().date()
    return daily_summary(storage.sales.get_all(), storage.jobs.get_all(), day)
