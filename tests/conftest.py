"""Shared pytest fixtures for videocalls tests."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from videocalls.api.app import AppContext, create_app
from videocalls.db.session import create_db_engine, init_db
from videocalls.providers.mock import MockProvider

SERVER_STARTED = datetime(2017, 3, 1, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    return engine


@pytest.fixture
def broken_engine(tmp_path):
    """Engine whose database file can never be opened."""
    return create_db_engine(f"sqlite:///{tmp_path}/missing/dir/videocalls.db")


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def provider():
    """Mock provider that records every lookup."""
    return MockProvider()


@pytest.fixture
def context(engine, provider):
    """Application context over the in-memory database."""
    return AppContext(
        session_factory=sessionmaker(bind=engine),
        provider=provider,
        server_started=SERVER_STARTED,
    )


@pytest.fixture
def client(context):
    """Test client for an app built from the test context."""
    return TestClient(create_app(context))
