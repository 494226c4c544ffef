"""Warranty API routes."""

import logging
from fastapi import APIRouter, Depends, HTTPException

from schemas.entities import WarrantyClaim, WarrantyStatus, WarrantyUpdate, utcnow
from schemas.workflow import WarrantyResponse
from services.warranty_status import warranty_status
from storage import Storage, get_storage
from tools import warranty as warranty_tools

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/warranties", tags=["warranties"])

CLAIM_ERROR_STATUS = {
    warranty_tools.NOT_FOUND: 404,
    warranty_tools.REASON_REQUIRED: 422,
    warranty_tools.ALREADY_CLAIMED: 409,
}


@router.get("", response_model=list[WarrantyResponse])
def list_warranties(status: WarrantyStatus | None = None, storage: Storage = Depends(get_storage)):
    """Get all warranties with their current status, optionally filtered by it."""
    now = utcnow()
    warranties = [
        WarrantyResponse(**w.model_dump(), status=warranty_status(w, now))
        for w in storage.warranties.get_all()
    ]
    if status is not None:
        warranties = [w for w in warranties if w.status == status]
    return warranties


@router.patch("/{warranty_id}", response_model=WarrantyResponse)
def update_warranty(warranty_id: str, data: WarrantyUpdate, storage: Storage = Depends(get_storage)):
    warranty = storage.warranties.update(warranty_id, data)
    if warranty is None:
        raise HTTPException(status_code=404, detail=f"Warranty {warranty_id} not found")
    return WarrantyResponse(**warranty.model_dump(), status=warranty_status(warranty))


@router.post("/{warranty_id}/claim", response_model=WarrantyResponse)
def claim(warranty_id: str, data: WarrantyClaim, storage: Storage = Depends(get_storage)):
    """Record a claim. The warranty becomes inactive for good."""
    result = warranty_tools.claim_warranty(storage, warranty_id, data.reason)
    if not result.success:
        error = (result.data or {}).get("error")
        raise HTTPException(status_code=CLAIM_ERROR_STATUS.get(error, 500), detail=result.message)
    warranty = storage.warranties.get(warranty_id)
    return WarrantyResponse(**warranty.model_dump(), status=warranty_status(warranty))


@router.delete("/{warranty_id}")
def delete_warranty(warranty_id: str, storage: Storage = Depends(get_storage)):
    return {"deleted": storage.warranties.delete(warranty_id)}
