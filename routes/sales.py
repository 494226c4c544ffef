"""Sales API routes. Sales are immutable once recorded."""

import logging
from datetime import date
from fastapi import APIRouter, Depends, Query

from schemas.entities import DailySale, DailySaleCreate
from storage import Storage, get_storage

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/sales", tags=["sales"])


@router.get("", response_model=list[DailySale])
def list_sales(
    day: date | None = Query(default=None, alias="date"),
    storage: Storage = Depends(get_storage),
):
    """Get all sales, or only those on one calendar day."""
    if day is not None:
        return storage.sales.get_by_date(day)
    return storage.sales.get_all()


@router.post("", response_model=DailySale, status_code=201)
def create_sale(data: DailySaleCreate, storage: Storage = Depends(get_storage)):
    return storage.sales.add(data)


@router.delete("/{sale_id}")
def delete_sale(sale_id: str, storage: Storage = Depends(get_storage)):
    return {"deleted": storage.sales.delete(sale_id)}
