"""ORM models for the remote RepairShop schema.

Column names follow the remote database, not the application. Translation
between the two lives in storage/field_maps.py.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, Text, JSON
from sqlalchemy.orm import relationship

from database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InventoryRecord(Base):
    """A spare part or accessory in stock."""

    __tablename__ = "inventory"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False, index=True)
    category = Column(String, nullable=False)  # screen, battery, accessory
    brand = Column(String, default="")
    model = Column(String, default="")
    stock = Column(Integer, nullable=False, default=0)
    price = Column(Float, nullable=False, default=0.0)
    min_stock = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<InventoryRecord {self.name}: {self.stock}>"


class JobRecord(Base):
    """A repair job."""

    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True, default=_new_id)
    customer_name = Column(String, nullable=False, index=True)
    customer_phone = Column(String, default="")
    device_brand = Column(String, default="")
    device_model = Column(String, default="")
    problem_description = Column(Text, default="")
    diagnosis = Column(Text, default="")
    status = Column(String, default="pending")  # pending, in_progress, completed, delivered
    estimated_cost = Column(Float, default=0.0)
    total_cost = Column(Float, default=0.0)
    parts_used = Column(JSON, default=list)  # List of {item_id, item_name, quantity, price}
    has_warranty = Column(Boolean, default=False)
    warranty_days = Column(Integer, default=30)
    notes = Column(Text, default="")
    start_date = Column(DateTime(timezone=True), default=_utcnow)
    actual_completion = Column(DateTime(timezone=True), nullable=True)
    delivered_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<JobRecord {self.id}: {self.customer_name} - {self.status}>"


class WarrantyRecord(Base):
    """A warranty issued for a completed job."""

    __tablename__ = "warranties"

    id = Column(String(36), primary_key=True, default=_new_id)
    # Weak reference: the job may only exist in a device's local store.
    job_id = Column(String(36), nullable=False, index=True)
    customer_name = Column(String, default="")
    device_info = Column(String, default="")
    work_description = Column(Text, default="")
    warranty_days = Column(Integer, nullable=False, default=30)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)
    is_active = Column(Boolean, default=True)
    claim_date = Column(DateTime(timezone=True), nullable=True)
    claim_description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # Relationships
    job = relationship(
        "JobRecord",
        primaryjoin="foreign(WarrantyRecord.job_id) == JobRecord.id",
        viewonly=True,
        uselist=False,
        lazy="joined",
    )

    def __repr__(self):
        return f"<WarrantyRecord {self.id}: job {self.job_id}>"


class SaleRecord(Base):
    """A recorded sale: repair charge or counter sale."""

    __tablename__ = "sales"

    id = Column(String(36), primary_key=True, default=_new_id)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    type = Column(String, nullable=False)  # repair, accessory_sale, device_sale
    description = Column(Text, default="")
    amount = Column(Float, nullable=False, default=0.0)
    payment_method = Column(String, nullable=False, default="cash")
    customer_name = Column(String, nullable=True)
    job_id = Column(String(36), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    def __repr__(self):
        return f"<SaleRecord {self.date}: ${self.amount:.2f}>"
