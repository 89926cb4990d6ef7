"""Process bootstrap.

Reads configuration, connects to the database, builds the provider and
serves the API with uvicorn. Any failure here is fatal: the service cannot
run without its database.
"""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI

from videocalls.api.app import AppContext, create_app
from videocalls.config import AppConfig
from videocalls.db.session import (
    check_connection,
    create_db_engine,
    create_session_factory,
    init_db,
)
from videocalls.providers.base import VideoProvider
from videocalls.providers.mock import MockProvider
from videocalls.providers.synq import SynqProvider

logger = logging.getLogger(__name__)


def build_provider(config: AppConfig) -> VideoProvider:
    """Create the video provider named by the configuration.

    Raises:
        ValueError: If the provider name is unknown.
    """
    if config.provider == "synq":
        return SynqProvider(
            api_key=config.synq_api_key,
            base_url=config.synq_api_url,
            timeout=config.synq_api_timeout,
        )
    if config.provider == "mock":
        return MockProvider()
    raise ValueError(f"unknown provider '{config.provider}'")


def build_context(config: AppConfig) -> AppContext:
    """Connect to the database, create tables and assemble the context.

    Raises:
        ValueError: If DATABASE_URL cannot be used.
        sqlalchemy.exc.OperationalError: If the database is unreachable.
    """
    engine = create_db_engine(config.database_url)
    check_connection(engine)
    init_db(engine)
    return AppContext(
        session_factory=create_session_factory(engine),
        provider=build_provider(config),
    )


def build_app(config: AppConfig) -> FastAPI:
    """Create the application for a configuration."""
    return create_app(build_context(config))


def main() -> None:
    """Entry point: configure logging, build the app and serve it."""
    config = AppConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not config.synq_api_key and config.provider == "synq":
        logger.warning("no SYNQ API key specified (SYNQ_API_KEY)")

    app = build_app(config)
    logger.info(f"Running server on port :{config.port}")
    uvicorn.run(app, host="0.0.0.0", port=config.port, log_level=config.log_level.lower())
