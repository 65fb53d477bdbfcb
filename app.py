#!/usr/bin/env python3
"""
Main entry point for the shortlinks service.

Storage backend: PostgreSQL when DATABASE_URL is set, otherwise in-memory with
optional snapshots to SNAPSHOT_PATH (restored on startup, written on shutdown).

Usage:
    python app.py

Environment variables:
    DATABASE_URL - PostgreSQL connection URL (optional)
    SNAPSHOT_PATH - Snapshot file for the in-memory backend (optional)
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    SHORT_CODE_LENGTH - Default short code length
    DELETE_FLUSH_INTERVAL_SECONDS - Interval between delete flushes
    LOG_LEVEL - Logging level
"""

import logging
import signal
import sys
from contextlib import asynccontextmanager
from typing import Tuple

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortlinks.batch import BatchDeleteProcessor
from shortlinks.common.logging_config import setup_logging
from shortlinks.repository import (
    InMemoryShortlinkRepository,
    PostgresShortlinkRepository,
    ShortlinkRepository,
    SnapshotStore,
)
from shortlinks.service import ShortenerService
from shortlinks.shortcode import ShortCodeGenerator
from web_app import create_app


def build_components(
    config: Config,
    logger: logging.Logger,
) -> Tuple[ShortlinkRepository, BatchDeleteProcessor, ShortenerService]:
    """Wire repository, delete processor and service from configuration."""
    if config.database_url:
        logger.info("Using PostgreSQL storage")
        repository: ShortlinkRepository = PostgresShortlinkRepository(
            dsn=config.database_url,
            pool_max_size=config.db_pool_max_size,
            ping_timeout_seconds=config.ping_timeout_seconds,
            create_tables=config.create_tables,
        )
    else:
        logger.info(f"Using in-memory storage (snapshot: {config.snapshot_path or 'disabled'})")
        repository = InMemoryShortlinkRepository(snapshot=SnapshotStore(config.snapshot_path))

    batch_processor = BatchDeleteProcessor(
        repository,
        flush_interval_seconds=config.delete_flush_interval_seconds,
    )
    service = ShortenerService(
        repository=repository,
        batch_processor=batch_processor,
        base_url=config.base_url,
        short_code_generator=ShortCodeGenerator(default_length=config.short_code_length),
        max_generation_attempts=config.max_generation_attempts,
        path_prefix=config.path_prefix,
    )
    return repository, batch_processor, service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    logger = logging.getLogger("shortlinks")
    repository = app.state.repository
    batch_processor = app.state.batch_processor

    logger.info("Starting shortlinks service...")

    await repository.connect()
    await repository.restore()
    batch_processor.start()

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down shortlinks service...")

    await app.state.service.close()

    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Shortlinks Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url'})}")

    repository, batch_processor, service = build_components(config, logger)
    app = create_app(
        repository=repository,
        service=service,
        batch_processor=batch_processor,
        config=config,
    )
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,
    )

    server = uvicorn.Server(uvicorn_config)

    # Setup signal handlers for graceful shutdown
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
