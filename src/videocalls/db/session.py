"""Database session management.

Builds SQLAlchemy engines from the configured DATABASE_URL. Postgres URLs
are converted to a libpq connection string and handed to psycopg2; SQLite
URLs are used as-is (local development and tests).
"""

from __future__ import annotations

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from videocalls.config import parse_database_url
from videocalls.db.schema import Base

POSTGRES_SCHEMES = ("postgres", "postgresql", "postgresql+psycopg2")


def create_db_engine(database_url: str) -> Engine:
    """Create an SQLAlchemy engine for a database URL.

    Args:
        database_url: postgres://... or sqlite://... URL.

    Returns:
        SQLAlchemy engine instance.

    Raises:
        ValueError: If the URL cannot be turned into connection parameters.
    """
    scheme = database_url.split("://", 1)[0].lower()

    if scheme in POSTGRES_SCHEMES:
        dsn = parse_database_url(database_url)
        if not dsn:
            raise ValueError(f"could not parse database url '{database_url}'")
        return create_engine(
            "postgresql+psycopg2://",
            connect_args={"dsn": dsn},
            pool_pre_ping=True,
        )

    if scheme == "sqlite":
        # SQLite thread-safety config for FastAPI concurrency:
        # - check_same_thread=False: Allow multi-threaded access
        # - StaticPool: one shared connection so :memory: survives across sessions
        if ":memory:" in database_url or database_url == "sqlite://":
            return create_engine(
                database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(database_url, connect_args={"check_same_thread": False})

    raise ValueError(f"unsupported database url scheme '{scheme}'")


def create_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to an engine."""
    return sessionmaker(bind=engine)


def check_connection(engine: Engine) -> None:
    """Open a connection and run a trivial query.

    Raises:
        sqlalchemy.exc.OperationalError: If the database is unreachable.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def init_db(engine: Engine) -> None:
    """Initialize database schema.

    Call this once during application startup to create tables.
    """
    Base.metadata.create_all(engine)

