"""Storage layer: local store, remote store and the fallback facades.

One ``Storage`` is built at startup and owned by the app; nothing in this
package keeps module-level state.
"""

from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.orm import sessionmaker

from config import settings as default_settings
from schemas.entities import InventoryItem, Job, Warranty, DailySale
from storage import local_store
from storage.facades import InventoryStorage, JobStorage, WarrantyStorage, SalesStorage
from storage.local_store import LocalStore
from storage.remote_store import RemoteStore, RemoteStoreError, RemoteUnavailableError
from storage.repositories import FallbackRepository, LocalRepository, RemoteRepository, Repository


@dataclass
class Storage:
    """The four entity facades plus the stores behind them."""
    local: LocalStore
    remote: RemoteStore
    inventory: InventoryStorage
    jobs: JobStorage
    warranties: WarrantyStorage
    sales: SalesStorage


def build_storage(
    local: LocalStore | None = None,
    session_factory: sessionmaker | None = None,
    trust_empty_remote: bool | None = None,
    settings=default_settings,
) -> Storage:
    """Wire the facades over one local store and one remote store."""
    if local is None:
        local = LocalStore(settings.LOCAL_STORE_DIR, settings.LOCAL_STORE_PREFIX)
    remote = RemoteStore(session_factory)
    trust = settings.TRUST_EMPTY_REMOTE if trust_empty_remote is None else trust_empty_remote

    def facade(cls, key, model):
        return cls(RemoteRepository(remote, key), LocalRepository(local, key, model), trust)

    return Storage(
        local=local,
        remote=remote,
        inventory=facade(InventoryStorage, local_store.INVENTORY, InventoryItem),
        jobs=facade(JobStorage, local_store.JOBS, Job),
        warranties=facade(WarrantyStorage, local_store.WARRANTIES, Warranty),
        sales=facade(SalesStorage, local_store.SALES, DailySale),
    )


def get_storage(request: Request) -> Storage:
    """Dependency that provides the app's storage."""
    return request.app.state.storage


__all__ = [
    "Storage", "build_storage", "get_storage",
    "LocalStore", "RemoteStore", "RemoteStoreError", "RemoteUnavailableError",
    "Repository", "LocalRepository", "RemoteRepository", "FallbackRepository",
    "InventoryStorage", "JobStorage", "WarrantyStorage", "SalesStorage",
]
