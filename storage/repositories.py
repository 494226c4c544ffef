"""Repository backends and the remote-then-local fallback composition.

``RemoteRepository`` and ``LocalRepository`` each implement ``Repository``
for one collection. ``FallbackRepository`` tries the remote first, mirrors
what it gets into the local store, and degrades to the local store when the
remote fails or has nothing.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Generic, Mapping, Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from schemas.entities import new_id, utcnow, as_utc
from storage.local_store import LocalStore
from storage.remote_store import RemoteStore, RemoteStoreError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

Fields = Mapping[str, Any] | BaseModel


def as_fields(data: Fields, partial: bool = False) -> dict[str, Any]:
    """Plain field dict from an input schema or mapping.

    For partial updates only the fields the caller actually set are kept.
    """
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_unset=partial)
    return dict(data)


def _touch(previous: datetime | None) -> datetime:
    """A fresh timestamp, strictly later than ``previous``."""
    now = utcnow()
    if previous is not None and now <= as_utc(previous):
        return as_utc(previous) + timedelta(microseconds=1)
    return now


class Repository(Protocol[T]):
    """Uniform access to one entity collection."""

    def get_all(self) -> list[T]:
        ...

    def add(self, fields: Fields) -> T | None:
        ...

    def update(self, record_id: str, fields: Fields) -> T | None:
        ...

    def delete(self, record_id: str) -> bool:
        ...


class LocalRepository(Generic[T]):
    """One collection in the local JSON store."""

    def __init__(self, store: LocalStore, key: str, model: type[T]):
        self.store = store
        self.key = key
        self.model = model

    def _load(self) -> list[T]:
        items = []
        for raw in self.store.read(self.key):
            try:
                items.append(self.model.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping invalid record in local '{self.key}': {e.error_count()} errors")
        return items

    def _save(self, items: list[T]) -> None:
        self.store.write(self.key, [i.model_dump(mode="json", by_alias=True) for i in items])

    def get_all(self) -> list[T]:
        return self._load()

    def replace_all(self, items: list[T]) -> None:
        """Full overwrite, used to mirror a remote read."""
        with self.store.lock(self.key):
            self._save(items)

    def add(self, fields: Fields) -> T:
        values = as_fields(fields)
        now = utcnow()
        values.update(id=new_id(), created_at=now, updated_at=now)
        item = self.model.model_validate(values)
        with self.store.lock(self.key):
            items = self._load()
            items.append(item)
            self._save(items)
        logger.info(f"Local add to {self.key}: ID={item.id}")
        return item

    def upsert(self, item: T) -> T:
        """Replace the record with the same id, or append it."""
        with self.store.lock(self.key):
            items = self._load()
            for index, existing in enumerate(items):
                if existing.id == item.id:
                    items[index] = item
                    break
            else:
                items.append(item)
            self._save(items)
        return item

    def get(self, record_id: str) -> T | None:
        for item in self._load():
            if item.id == record_id:
                return item
        return None

    def update(self, record_id: str, fields: Fields) -> T | None:
        changes = as_fields(fields, partial=True)
        changes.pop("id", None)
        with self.store.lock(self.key):
            items = self._load()
            for index, existing in enumerate(items):
                if existing.id == record_id:
                    merged = {**existing.model_dump(), **changes}
                    merged["updated_at"] = _touch(existing.updated_at)
                    try:
                        items[index] = self.model.model_validate(merged)
                    except ValidationError as e:
                        logger.error(f"Rejected update to {self.key} {record_id}: {e.error_count()} invalid fields")
                        return None
                    self._save(items)
                    return items[index]
        logger.info(f"Local {self.key} has no record {record_id}")
        return None

    def delete(self, record_id: str) -> bool:
        with self.store.lock(self.key):
            items = self._load()
            remaining = [i for i in items if i.id != record_id]
            if len(remaining) != len(items):
                self._save(remaining)
        return True


class RemoteRepository(Generic[T]):
    """One collection in the remote database."""

    def __init__(self, remote: RemoteStore, entity: str):
        self.remote = remote
        self.entity = entity

    @property
    def enabled(self) -> bool:
        return self.remote.enabled

    def fetch_all(self) -> list[T]:
        """Like get_all, but raises RemoteStoreError instead of returning []."""
        return self.remote.fetch(self.entity)

    def get_all(self) -> list[T]:
        return self.remote.list(self.entity)

    def add(self, fields: Fields) -> T | None:
        return self.remote.insert(self.entity, as_fields(fields))

    def update(self, record_id: str, fields: Fields) -> T | None:
        return self.remote.update(self.entity, record_id, as_fields(fields, partial=True))

    def delete(self, record_id: str) -> bool:
        return self.remote.delete(self.entity, record_id)


class FallbackRepository(Generic[T]):
    """Remote first, mirrored into and degrading to the local store.

    ``trust_empty_primary`` decides what a successful but empty remote read
    means. When False, an empty remote collection cannot be told apart from
    an unreachable one and the local copy is served instead.
    """

    def __init__(
        self,
        primary: RemoteRepository[T],
        fallback: LocalRepository[T],
        trust_empty_primary: bool = False,
    ):
        self.primary = primary
        self.fallback = fallback
        self.trust_empty_primary = trust_empty_primary

    @property
    def name(self) -> str:
        return self.fallback.key

    def get_all(self) -> list[T]:
        if not self.primary.enabled:
            return self.fallback.get_all()

        try:
            items = self.primary.fetch_all()
        except RemoteStoreError as e:
            logger.warning(f"Remote read of {self.name} failed, using local copy: {str(e)}")
            return self.fallback.get_all()

        if items or self.trust_empty_primary:
            self.fallback.replace_all(items)
            return items

        logger.info(f"Remote {self.name} returned no rows; serving local copy")
        return self.fallback.get_all()

    def get(self, record_id: str) -> T | None:
        for item in self.get_all():
            if item.id == record_id:
                return item
        return None

    def add(self, fields: Fields) -> T:
        created = self.primary.add(fields)
        if created is not None:
            return self.fallback.upsert(created)

        if self.primary.enabled:
            logger.warning(f"Remote add to {self.name} failed; storing locally")
        return self.fallback.add(fields)

    def update(self, record_id: str, fields: Fields) -> T | None:
        updated = self.primary.update(record_id, fields)
        if updated is not None:
            return self.fallback.upsert(updated)
        return self.fallback.update(record_id, fields)

    def delete(self, record_id: str) -> bool:
        if self.primary.delete(record_id):
            logger.info(f"Remote delete from {self.name}: ID={record_id}")
        return self.fallback.delete(record_id)
