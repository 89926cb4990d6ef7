"""FastAPI application factory.

All process-wide state (session factory, provider, start time) lives on
one AppContext built at startup and stored on app.state. Routes reach it
through the dependencies below.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import AsyncIterator, Generator

from fastapi import FastAPI, Request
from sqlalchemy.orm import sessionmaker

from videocalls.db.repo import DbSession
from videocalls.providers.base import VideoProvider


@dataclass
class AppContext:
    """Everything request handlers need, built once per process."""

    session_factory: sessionmaker
    provider: VideoProvider
    server_started: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def get_context(request: Request) -> AppContext:
    """Dependency returning the application context."""
    return request.app.state.context


def get_db_session(request: Request) -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    session = get_context(request).session_factory()
    try:
        yield session
    finally:
        session.close()


def get_provider(request: Request) -> VideoProvider:
    """Dependency returning the configured video provider."""
    return get_context(request).provider


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Stamp the moment the server starts accepting requests.
    app.state.context.server_started = datetime.now(timezone.utc)
    yield


def create_app(context: AppContext) -> FastAPI:
    """Create FastAPI application.

    Args:
        context: Application context shared by all requests.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="videocalls",
        description="Video details lookups with a persisted call log",
        version="0.1.0",
        lifespan=_lifespan,
    )
    app.state.context = context

    # Include routes
    from videocalls.api.routes import details, status

    app.include_router(details.router, prefix="/v1")
    app.include_router(status.router, prefix="/v1")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app
