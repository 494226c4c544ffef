"""Inventory API routes."""

import logging
from fastapi import APIRouter, Depends, HTTPException

from schemas.entities import InventoryItem, InventoryItemCreate, InventoryItemUpdate
from schemas.workflow import InventoryItemResponse
from storage import Storage, get_storage

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/inventory", tags=["inventory"])


def _with_flag(item: InventoryItem) -> InventoryItemResponse:
    return InventoryItemResponse(**item.model_dump(), low_stock=item.is_low_stock)


@router.get("", response_model=list[InventoryItemResponse])
def list_inventory(storage: Storage = Depends(get_storage)):
    """Get all inventory items."""
    return [_with_flag(i) for i in storage.inventory.get_all()]


@router.get("/low-stock", response_model=list[InventoryItemResponse])
def list_low_stock(storage: Storage = Depends(get_storage)):
    """Items at or below their minimum stock."""
    return [_with_flag(i) for i in storage.inventory.low_stock()]


@router.post("", response_model=InventoryItemResponse, status_code=201)
def create_item(data: InventoryItemCreate, storage: Storage = Depends(get_storage)):
    return _with_flag(storage.inventory.add(data))


@router.patch("/{item_id}", response_model=InventoryItemResponse)
def update_item(item_id: str, data: InventoryItemUpdate, storage: Storage = Depends(get_storage)):
    item = storage.inventory.update(item_id, data)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Inventory item {item_id} not found")
    return _with_flag(item)


@router.delete("/{item_id}")
def delete_item(item_id: str, storage: Storage = Depends(get_storage)):
    return {"deleted": storage.inventory.delete(item_id)}
