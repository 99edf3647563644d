#!/usr/bin/env python3
"""
Main entry point for the link service.

Concurrency: requests are served concurrently via async I/O (FastAPI +
asyncpg connection pool). Set WORKERS > 1 for multi-process scaling; every
worker has its own pool and all of them share the links table.

Usage:
    linkservice

Environment variables:
    DATABASE_URL - PostgreSQL connection URL
    DATABASE_CREATE_TABLES - Set to 'true' to create the links table at startup
    DATABASE_CONNECT_RETRIES - Startup connection attempts (default 5)
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import logging
import signal
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from .config import Config, load_config
from .lib.codegen import CodeGenerator
from .lib.common.logging_config import setup_logging
from .lib.database.base import LinkStoreBase
from .lib.database.memory import MemoryLinkStore
from .lib.database.postgres import PostgresLinkStore
from .lib.service import LinkService
from .web_app import create_app


def build_store(
    config: Config,
    logger: Optional[logging.Logger] = None,
    in_memory: bool = False,
) -> LinkStoreBase:
    """Create the link store described by the configuration."""
    if in_memory:
        return MemoryLinkStore(logger=logger)

    return PostgresLinkStore(
        dsn=config.database_url,
        pool_max_size=config.database_pool_max_size,
        command_timeout=config.database_command_timeout,
        connect_retries=config.database_connect_retries,
        connect_retry_delay=config.database_connect_retry_delay,
        logger=logger,
    )


async def start_service(
    config: Config,
    store: LinkStoreBase,
    logger: Optional[logging.Logger] = None,
) -> LinkService:
    """Connect the store and build the service on top of it."""
    await store.connect()

    if config.database_create_tables:
        await store.ensure_schema()

    return LinkService(store=store, generator=CodeGenerator(), logger=logger)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting link service...")

    store = build_store(config, logger=logger)
    service = await start_service(config, store, logger=logger)

    app.state.store = store
    app.state.service = service

    logger.info("Service started successfully")

    try:
        yield
    finally:
        logger.info("Shutting down link service...")
        await service.close()
        logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Link Service")
    logger.info(f"Configuration: {config.safe_dump()}")

    # Store and service are attached in lifespan
    app = create_app(
        store_instance=None,
        service_instance=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
