"""RepairShop — FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from database import create_session_factory, init_db
from routes import (
    inventory_router, jobs_router, warranties_router,
    sales_router, dashboard_router, health_router,
)
from storage import build_storage

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-7s | %(name)-25s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown events."""
    logger.info("=" * 60)
    logger.info("RepairShop Backend — Starting up")
    logger.info("=" * 60)

    session_factory = create_session_factory()
    if session_factory is not None and not init_db(session_factory):
        logger.warning("Remote database unavailable, running on the local store only")
        session_factory = None

    app.state.storage = build_storage(session_factory=session_factory)
    logger.info(
        f"Storage ready (remote: {'enabled' if app.state.storage.remote.enabled else 'disabled'}, "
        f"local: {settings.LOCAL_STORE_DIR})"
    )
    yield
    logger.info("RepairShop Backend — Shutting down")


app = FastAPI(
    title="RepairShop",
    description="Inventory, repair jobs, warranties and sales for a phone repair shop",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS: allow the frontend origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routes
app.include_router(health_router)
app.include_router(inventory_router)
app.include_router(jobs_router)
app.include_router(warranties_router)
app.include_router(sales_router)
app.include_router(dashboard_router)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "service": "RepairShop",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
    }
