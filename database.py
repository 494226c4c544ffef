"""Database engine and session management for the remote store."""

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


def create_db_engine(url: str) -> Engine:
    """Build an engine for the given URL, normalising hosted Postgres URLs."""
    # SQLAlchemy requires postgresql:// instead of postgres://
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)

    return create_engine(
        url,
        # Only use check_same_thread for SQLite
        **({"connect_args": {"check_same_thread": False}} if url.startswith("sqlite") else {}),
        echo=False,
    )


def create_session_factory(url: str | None = None) -> sessionmaker | None:
    """
    Return a session factory for the remote database, or None when the
    remote is not configured.
    """
    url = settings.DATABASE_URL if url is None else url
    if not url:
        logger.info("DATABASE_URL not set; remote store disabled")
        return None
    engine = create_db_engine(url)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(session_factory: sessionmaker | None) -> bool:
    """Create all tables. Returns False when the remote could not be reached."""
    if session_factory is None:
        return False
    # Register the ORM tables on Base.metadata
    import models.models  # noqa: F401

    try:
        Base.metadata.create_all(bind=session_factory.kw["bind"])
        return True
    except Exception as e:
        logger.error(f"Failed to initialise remote database: {str(e)}")
        return False
