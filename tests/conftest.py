"""Pytest configuration and fixtures."""

import pytest
from typing import AsyncGenerator

from shortlinks.batch import BatchDeleteProcessor
from shortlinks.repository import InMemoryShortlinkRepository, SnapshotStore
from shortlinks.service import ShortenerService
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.common.logging_config import setup_logging

BASE_URL = "http://testserver"
FLUSH_INTERVAL = 0.05


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def snapshot_path(tmp_path):
    return str(tmp_path / "shortlinks.json")


@pytest.fixture
def repository(snapshot_path, logger) -> InMemoryShortlinkRepository:
    """Create in-memory repository backed by a temporary snapshot file."""
    return InMemoryShortlinkRepository(
        snapshot=SnapshotStore(snapshot_path, logger=logger),
        logger=logger,
    )


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6, seed=1234)


@pytest.fixture
async def batch_processor(repository, logger) -> AsyncGenerator[BatchDeleteProcessor, None]:
    """Create and start a fast-flushing batch delete processor."""
    processor = BatchDeleteProcessor(
        repository,
        flush_interval_seconds=FLUSH_INTERVAL,
        logger=logger,
    )
    processor.start()

    yield processor

    await processor.stop()


@pytest.fixture
async def service(repository, batch_processor, short_code_generator, logger) -> ShortenerService:
    """Create service instance."""
    return ShortenerService(
        repository=repository,
        batch_processor=batch_processor,
        base_url=BASE_URL,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
