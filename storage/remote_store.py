"""Remote store client: CRUD against the managed relational database.

``list``, ``insert``, ``update`` and ``delete`` never raise: failures are
logged and reported as an empty list, None or False. ``fetch`` is the one
raising variant, for callers that need to tell "empty" from "unreachable".
"""

import logging
from typing import Any, Mapping

from sqlalchemy.orm import Session, sessionmaker

from storage.field_maps import FIELD_MAPS, FieldMap

logger = logging.getLogger(__name__)


class RemoteStoreError(Exception):
    """The remote store could not serve a request."""


class RemoteUnavailableError(RemoteStoreError):
    """No remote database is configured."""


class RemoteStore:
    """Thin query/insert/update/delete wrapper over a SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker | None, field_maps: Mapping[str, FieldMap] = FIELD_MAPS):
        self._session_factory = session_factory
        self._field_maps = field_maps

    @property
    def enabled(self) -> bool:
        return self._session_factory is not None

    def _session(self) -> Session:
        if self._session_factory is None:
            raise RemoteUnavailableError("remote store not configured")
        return self._session_factory()

    def field_map(self, entity: str) -> FieldMap:
        return self._field_maps[entity]

    def fetch(self, entity: str) -> list:
        """All rows of ``entity`` mapped to entities; raises RemoteStoreError."""
        fmap = self.field_map(entity)
        try:
            with self._session() as db:
                column = getattr(fmap.record, fmap.order_by)
                query = db.query(fmap.record).order_by(column.desc() if fmap.descending else column)
                return [fmap.to_entity(r) for r in query.all()]
        except RemoteStoreError:
            raise
        except Exception as e:
            raise RemoteStoreError(f"Error fetching {entity}: {str(e)}") from e

    def list(self, entity: str) -> list:
        if not self.enabled:
            return []
        try:
            return self.fetch(entity)
        except RemoteStoreError as e:
            logger.error(str(e))
            return []

    def insert(self, entity: str, fields: Mapping[str, Any]):
        if not self.enabled:
            return None
        fmap = self.field_map(entity)
        db = self._session()
        try:
            record = fmap.record(**fmap.to_columns(fields))
            db.add(record)
            db.commit()
            db.refresh(record)
            inserted = fmap.to_entity(record)
            logger.info(f"Remote insert into {entity}: ID={inserted.id}")
            return inserted
        except Exception as e:
            db.rollback()
            logger.error(f"Error adding to {entity}: {str(e)}")
            return None
        finally:
            db.close()

    def update(self, entity: str, record_id: str, fields: Mapping[str, Any]):
        if not self.enabled:
            return None
        fmap = self.field_map(entity)
        payload = fmap.to_columns({k: v for k, v in fields.items() if k != "id"})
        db = self._session()
        try:
            record = db.get(fmap.record, record_id)
            if record is None:
                logger.info(f"Remote {entity} has no record {record_id}")
                return None
            for column, value in payload.items():
                setattr(record, column, value)
            db.commit()
            db.refresh(record)
            return fmap.to_entity(record)
        except Exception as e:
            db.rollback()
            logger.error(f"Error updating {entity} {record_id}: {str(e)}")
            return None
        finally:
            db.close()

    def delete(self, entity: str, record_id: str) -> bool:
        if not self.enabled:
            return False
        fmap = self.field_map(entity)
        db = self._session()
        try:
            db.query(fmap.record).filter(fmap.record.id == record_id).delete(synchronize_session=False)
            db.commit()
            return True
        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting {entity} {record_id}: {str(e)}")
            return False
        finally:
            db.close()
