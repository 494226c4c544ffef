"""Health check route."""

from fastapi import APIRouter, Depends

from storage import Storage, get_storage

router = APIRouter(tags=["health"])


@router.get("/api/health")
def health_check(storage: Storage = Depends(get_storage)):
    """Health check endpoint for deployment monitoring."""
    return {
        "status": "healthy",
        "service": "RepairShop Backend",
        "remote": "enabled" if storage.remote.enabled else "disabled",
        "localStore": "available" if storage.local.available else "unavailable",
    }
