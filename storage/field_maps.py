"""Bidirectional field maps between entities and remote columns.

This is the only place where application field names are translated to the
remote schema's column names and back. Every row read from the remote goes
through ``FieldMap.to_entity`` before the app treats it as an entity.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel

from models.models import InventoryRecord, JobRecord, WarrantyRecord, SaleRecord
from schemas.entities import InventoryItem, Job, Warranty, DailySale, as_utc


def _encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        # Some backends (SQLite) drop the offset, so always store UTC
        return as_utc(value)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_encode(v) for v in value]
    return value


def _decode(value: Any) -> Any:
    if isinstance(value, datetime):
        return as_utc(value)
    return value


@dataclass(frozen=True)
class FieldMap:
    """Field name → column name table for one entity."""

    entity: type[BaseModel]
    record: type
    columns: Mapping[str, str]
    order_by: str
    descending: bool = False
    # Fields filled by joins at read time: field -> callable(record) -> value | None
    joined: Mapping[str, Any] = field(default_factory=dict)

    def to_columns(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Sparse column payload: only fields present in ``fields`` are kept."""
        return {
            self.columns[name]: _encode(value)
            for name, value in fields.items()
            if name in self.columns
        }

    def to_entity(self, record) -> BaseModel:
        data = {name: _decode(getattr(record, column)) for name, column in self.columns.items()}
        # NULL columns fall back to the entity defaults
        data = {name: value for name, value in data.items() if value is not None}
        for name, resolve in self.joined.items():
            value = resolve(record)
            if value:
                data[name] = value
        return self.entity.model_validate(data)


def _job_customer(record: WarrantyRecord) -> str | None:
    return record.job.customer_name if record.job is not None else None


def _job_device(record: WarrantyRecord) -> str | None:
    if record.job is None:
        return None
    return f"{record.job.device_brand or ''} {record.job.device_model or ''}".strip()


INVENTORY_MAP = FieldMap(
    entity=InventoryItem,
    record=InventoryRecord,
    columns={
        "id": "id",
        "name": "name",
        "category": "category",
        "brand": "brand",
        "model": "model",
        "quantity": "stock",
        "price": "price",
        "min_stock": "min_stock",
        "created_at": "created_at",
        "updated_at": "updated_at",
    },
    order_by="name",
)

JOB_MAP = FieldMap(
    entity=Job,
    record=JobRecord,
    columns={
        "id": "id",
        "client_name": "customer_name",
        "client_phone": "customer_phone",
        "device_brand": "device_brand",
        "device_model": "device_model",
        "problem": "problem_description",
        "diagnosis": "diagnosis",
        "status": "status",
        "estimated_cost": "estimated_cost",
        "final_cost": "total_cost",
        "parts_used": "parts_used",
        "has_warranty": "has_warranty",
        "warranty_days": "warranty_days",
        "notes": "notes",
        "start_date": "start_date",
        "completion_date": "actual_completion",
        "delivery_date": "delivered_at",
        "created_at": "created_at",
        "updated_at": "updated_at",
    },
    order_by="created_at",
    descending=True,
)

WARRANTY_MAP = FieldMap(
    entity=Warranty,
    record=WarrantyRecord,
    columns={
        "id": "id",
        "job_id": "job_id",
        "client_name": "customer_name",
        "device_info": "device_info",
        "work_done": "work_description",
        "warranty_days": "warranty_days",
        "start_date": "start_date",
        "end_date": "end_date",
        "is_active": "is_active",
        "claim_date": "claim_date",
        "claim_reason": "claim_description",
        "created_at": "created_at",
        "updated_at": "updated_at",
    },
    order_by="created_at",
    descending=True,
    joined={"client_name": _job_customer, "device_info": _job_device},
)

SALE_MAP = FieldMap(
    entity=DailySale,
    record=SaleRecord,
    columns={
        "id": "id",
        "date": "date",
        "type": "type",
        "description": "description",
        "amount": "amount",
        "payment_method": "payment_method",
        "client_name": "customer_name",
        "job_id": "job_id",
        "created_at": "created_at",
        "updated_at": "updated_at",
    },
    order_by="date",
    descending=True,
)

FIELD_MAPS: dict[str, FieldMap] = {
    "inventory": INVENTORY_MAP,
    "jobs": JOB_MAP,
    "warranties": WARRANTY_MAP,
    "sales": SALE_MAP,
}
