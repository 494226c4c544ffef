from routes.inventory import router as inventory_router
from routes.jobs import router as jobs_router
from routes.warranties import router as warranties_router
from routes.sales import router as sales_router
from routes.dashboard import router as dashboard_router
from routes.health import router as health_router

__all__ = [
    "inventory_router", "jobs_router", "warranties_router",
    "sales_router", "dashboard_router", "health_router",
]
