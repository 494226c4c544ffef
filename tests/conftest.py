"""Shared fixtures: a local store in a temp directory and an in-memory remote."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models.models  # noqa: F401
from database import Base
from storage import build_storage
from storage.local_store import LocalStore


@pytest.fixture
def local_store(tmp_path):
    return LocalStore(tmp_path / "data", prefix="test_")


@pytest.fixture
def session_factory():
    """Fresh in-memory SQLite database standing in for the remote."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def storage(local_store):
    """Local-only storage, as when no database is configured."""
    return build_storage(local=local_store, session_factory=None, trust_empty_remote=False)


@pytest.fixture
def remote_storage(local_store, session_factory):
    """Storage backed by the in-memory remote and mirrored into the local store."""
    return build_storage(local=local_store, session_factory=session_factory, trust_empty_remote=False)


@pytest.fixture
def break_remote(session_factory):
    """Call to drop every remote table so later queries fail."""
    def _break():
        Base.metadata.drop_all(session_factory.kw["bind"])
    return _break
