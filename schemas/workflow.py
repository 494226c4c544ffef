"""Pydantic schemas for workflow steps, reports and API responses."""

from __future__ import annotations

from pydantic import Field

from schemas.entities import CamelModel, InventoryItem, Job, Warranty, WarrantyStatus


# --- Workflow Schemas ---

class StepResult(CamelModel):
    """Result of a single workflow step."""
    step: str
    success: bool
    message: str
    data: dict | None = None


class WorkflowResult(CamelModel):
    """Full result of a multi-step workflow. Steps are not atomic."""
    job: Job | None = None
    steps: list[StepResult] = Field(default_factory=list)
    success: bool = True
    summary: str = ""

    @property
    def steps_executed(self) -> list[str]:
        return [s.step for s in self.steps]

    def step(self, name: str) -> StepResult | None:
        for s in self.steps:
            if s.step == name:
                return s
        return None


# --- Report Schemas ---

class Breakdown(CamelModel):
    count: int = 0
    revenue: float = 0.0


class DailyPoint(CamelModel):
    date: str
    sales: int = 0
    revenue: float = 0.0


class SalesReport(CamelModel):
    """Sales metrics over a trailing period."""
    period: str
    total_revenue: float = 0.0
    total_sales: int = 0
    average_sale: float = 0.0
    by_type: dict[str, Breakdown] = Field(default_factory=dict)
    by_payment: dict[str, Breakdown] = Field(default_factory=dict)
    daily: list[DailyPoint] = Field(default_factory=list)
    growth: int = 0


# --- API Response Schemas ---

class InventoryItemResponse(InventoryItem):
    """Inventory item with its derived low-stock flag."""
    low_stock: bool = False


class WarrantyResponse(Warranty):
    """Warranty with its derived status."""
    status: WarrantyStatus


class DashboardSummary(CamelModel):
    """Dashboard overview data."""
    revenue_today: float = 0.0
    sales_today: int = 0
    open_jobs: int = 0
    low_stock_items: list[dict] = Field(default_factory=list)
    warranty_counts: dict[str, int] = Field(default_factory=dict)
    expiring_warranties: list[dict] = Field(default_factory=list)
    recent_jobs: list[dict] = Field(default_factory=list)
    remote_enabled: bool = False
