"""Pydantic schemas for the shop's entities and their API inputs.

Attributes are snake_case in Python. JSON (the local store files and the HTTP
API) uses camelCase aliases.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from config import settings


def new_id() -> str:
    """Collision-resistant identifier for locally created records."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """The same instant in UTC. Naive datetimes are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CamelModel(BaseModel):
    """Base model serialising to camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("*", mode="after")
    @classmethod
    def _datetimes_in_utc(cls, value):
        if isinstance(value, datetime):
            return as_utc(value)
        return value


# --- Enumerations ---

class Category(str, Enum):
    SCREEN = "screen"
    BATTERY = "battery"
    ACCESSORY = "accessory"


class JobStatus(str, Enum):
    """Ordered job lifecycle."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    DELIVERED = "delivered"

    @property
    def is_finished(self) -> bool:
        """Completed or delivered: the stage that triggers sale/warranty/stock."""
        return self in (JobStatus.COMPLETED, JobStatus.DELIVERED)


class SaleType(str, Enum):
    REPAIR = "repair"
    ACCESSORY_SALE = "accessory_sale"
    DEVICE_SALE = "device_sale"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    TRANSFER = "transfer"


class WarrantyStatus(str, Enum):
    CLAIMED = "claimed"
    INACTIVE = "inactive"
    EXPIRED = "expired"
    EXPIRING_SOON = "expiring_soon"
    ACTIVE = "active"


# --- Stored entities ---

class Entity(CamelModel):
    """Fields every stored record carries."""
    id: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class InventoryItem(Entity):
    """A spare part or accessory in stock."""
    name: str
    category: Category
    brand: str = ""
    model: str = ""
    quantity: int = 0
    price: float = 0.0
    min_stock: int = 0

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_stock


class PartUsed(CamelModel):
    """Snapshot of an inventory item consumed by a job, at its price then."""
    item_id: str
    item_name: str
    quantity: int = Field(default=1, ge=1)
    price: float = Field(default=0.0, ge=0)


class Job(Entity):
    """A repair job for a customer's device."""
    client_name: str
    client_phone: str = ""
    device_brand: str = ""
    device_model: str = ""
    problem: str = ""
    diagnosis: str = ""
    status: JobStatus = JobStatus.PENDING
    estimated_cost: float = 0.0
    final_cost: float = 0.0
    parts_used: list[PartUsed] = Field(default_factory=list)
    has_warranty: bool = False
    warranty_days: int = 30
    notes: str = ""
    start_date: datetime = Field(default_factory=utcnow)
    completion_date: datetime | None = None
    delivery_date: datetime | None = None

    @property
    def device_info(self) -> str:
        return f"{self.device_brand} {self.device_model}".strip()

    @property
    def parts_cost(self) -> float:
        return sum(p.price * p.quantity for p in self.parts_used)

    @property
    def charge_amount(self) -> float:
        """What the customer pays: the final cost once set, else the estimate."""
        return self.final_cost if self.final_cost > 0 else self.estimated_cost


class Warranty(Entity):
    """Warranty on the work done for a job."""
    job_id: str
    client_name: str = ""
    device_info: str = ""
    work_done: str = ""
    warranty_days: int
    start_date: datetime
    end_date: datetime
    is_active: bool = True
    claim_date: datetime | None = None
    claim_reason: str | None = None


class DailySale(Entity):
    """A recorded sale."""
    date: datetime
    type: SaleType
    description: str = ""
    amount: float
    payment_method: PaymentMethod
    client_name: str | None = None
    job_id: str | None = None


class PaymentBreakdown(CamelModel):
    cash: float = 0.0
    card: float = 0.0
    transfer: float = 0.0


class DailySummary(CamelModel):
    """Totals for one calendar day."""
    date: str
    total_sales: int = 0
    total_jobs: int = 0
    total_revenue: float = 0.0
    payment_breakdown: PaymentBreakdown = Field(default_factory=PaymentBreakdown)


# --- Inputs: create (id/timestamps assigned by storage) ---

class InventoryItemCreate(CamelModel):
    name: str = Field(min_length=1)
    category: Category
    brand: str = ""
    model: str = ""
    quantity: int = Field(default=0, ge=0)
    price: float = Field(default=0.0, ge=0)
    min_stock: int = Field(default=0, ge=0)


class JobCreate(CamelModel):
    client_name: str = Field(min_length=1)
    client_phone: str = ""
    device_brand: str = ""
    device_model: str = ""
    problem: str = ""
    diagnosis: str = ""
    status: JobStatus = JobStatus.PENDING
    estimated_cost: float = Field(default=0.0, ge=0)
    final_cost: float = Field(default=0.0, ge=0)
    parts_used: list[PartUsed] = Field(default_factory=list)
    has_warranty: bool = False
    warranty_days: int = Field(default_factory=lambda: settings.DEFAULT_WARRANTY_DAYS, ge=0)
    notes: str = ""
    start_date: datetime = Field(default_factory=utcnow)
    completion_date: datetime | None = None
    delivery_date: datetime | None = None


class WarrantyCreate(CamelModel):
    job_id: str
    client_name: str = ""
    device_info: str = ""
    work_done: str = ""
    warranty_days: int = Field(ge=0)
    start_date: datetime = Field(default_factory=utcnow)
    end_date: datetime | None = None
    is_active: bool = True

    @model_validator(mode="after")
    def _fill_end_date(self) -> "WarrantyCreate":
        if self.end_date is None:
            self.end_date = self.start_date + timedelta(days=self.warranty_days)
        return self


class DailySaleCreate(CamelModel):
    date: datetime = Field(default_factory=utcnow)
    type: SaleType
    description: str = ""
    amount: float = Field(gt=0)
    payment_method: PaymentMethod = PaymentMethod.CASH
    client_name: str | None = None
    job_id: str | None = None


# --- Inputs: partial updates (only provided fields are applied) ---

class PartialUpdate(CamelModel):
    """Base for partial updates.

    Fields are optional so they can be left out, but only the names in
    ``nullable`` may be sent as an explicit null.
    """

    nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_nulls(self) -> "PartialUpdate":
        nulls = sorted(
            name for name in self.model_fields_set
            if getattr(self, name) is None and name not in self.nullable
        )
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self


class InventoryItemUpdate(PartialUpdate):
    name: str | None = Field(default=None, min_length=1)
    category: Category | None = None
    brand: str | None = None
    model: str | None = None
    quantity: int | None = Field(default=None, ge=0)
    price: float | None = Field(default=None, ge=0)
    min_stock: int | None = Field(default=None, ge=0)


class JobUpdate(PartialUpdate):
    nullable: ClassVar[frozenset[str]] = frozenset({"completion_date", "delivery_date"})

    client_name: str | None = Field(default=None, min_length=1)
    client_phone: str | None = None
    device_brand: str | None = None
    device_model: str | None = None
    problem: str | None = None
    diagnosis: str | None = None
    status: JobStatus | None = None
    estimated_cost: float | None = Field(default=None, ge=0)
    final_cost: float | None = Field(default=None, ge=0)
    parts_used: list[PartUsed] | None = None
    has_warranty: bool | None = None
    warranty_days: int | None = Field(default=None, ge=0)
    notes: str | None = None
    completion_date: datetime | None = None
    delivery_date: datetime | None = None


class WarrantyUpdate(PartialUpdate):
    """Editable warranty details. Claims go through WarrantyClaim only."""
    client_name: str | None = None
    device_info: str | None = None
    work_done: str | None = None
    is_active: bool | None = None


class WarrantyClaim(CamelModel):
    reason: str = Field(min_length=1)
