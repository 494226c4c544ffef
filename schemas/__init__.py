from schemas.entities import (
    Category, JobStatus, SaleType, PaymentMethod, WarrantyStatus,
    InventoryItem, PartUsed, Job, Warranty, DailySale, DailySummary, PaymentBreakdown,
    InventoryItemCreate, JobCreate, WarrantyCreate, DailySaleCreate,
    InventoryItemUpdate, JobUpdate, WarrantyUpdate, WarrantyClaim,
)
from schemas.workflow import (
    StepResult, WorkflowResult, SalesReport, Breakdown, DailyPoint,
    InventoryItemResponse, WarrantyResponse, DashboardSummary,
)

__all__ = [
    "Category", "JobStatus", "SaleType", "PaymentMethod", "WarrantyStatus",
    "InventoryItem", "PartUsed", "Job", "Warranty", "DailySale", "DailySummary", "PaymentBreakdown",
    "InventoryItemCreate", "JobCreate", "WarrantyCreate", "DailySaleCreate",
    "InventoryItemUpdate", "JobUpdate", "WarrantyUpdate", "WarrantyClaim",
    "StepResult", "WorkflowResult", "SalesReport", "Breakdown", "DailyPoint",
    "InventoryItemResponse", "WarrantyResponse", "DashboardSummary",
]
