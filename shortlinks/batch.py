"""Buffered, periodically flushed deletion of shortlinks."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from .repository.base import ShortlinkRepository


@dataclass
class DeleteRequest:
    owner_id: str
    uids: List[str] = field(default_factory=list)


class BatchDeleteProcessor:
    """Collect per-owner delete requests and flush them on a fixed interval.

    A single worker task owns the buffer: producers only put requests on a
    queue, so flushes for the same owner never overlap. Delivery is at most
    once. A failed flush is logged and dropped, and whatever is still
    buffered when the worker stops is lost.
    """

    def __init__(
        self,
        repository: ShortlinkRepository,
        flush_interval_seconds: float = 1.0,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize batch delete processor.

        Args:
            repository: Repository receiving delete_many calls
            flush_interval_seconds: Time between two flushes
            logger: Optional logger instance
        """
        if flush_interval_seconds <= 0:
            raise ValueError("flush_interval_seconds must be positive")

        self.repository = repository
        self.flush_interval_seconds = flush_interval_seconds
        self.logger = logger or logging.getLogger(__name__)

        self._queue: Optional[asyncio.Queue] = None
        self._buffer: Dict[str, List[str]] = {}
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the worker on the running event loop."""
        if self.running:
            return

        self._queue = asyncio.Queue()
        self._buffer = {}
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name="shortlinks-batch-delete"
        )
        self.logger.info(
            f"Batch delete processor started (flush every {self.flush_interval_seconds}s)"
        )

    def enqueue(self, owner_id: str, uids: Sequence[str]) -> None:
        """Submit UIDs for deletion without waiting for the flush.

        Raises:
            RuntimeError: If the processor has not been started
        """
        if self._queue is None or not self.running:
            raise RuntimeError("batch delete processor is not running")

        self._queue.put_nowait(DeleteRequest(owner_id=owner_id, uids=list(uids)))

    async def stop(self) -> None:
        """Stop the worker. Buffered deletes are dropped."""
        if self._task is None:
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

        if self._queue is not None:
            self._drain()
        pending = sum(len(uids) for uids in self._buffer.values())
        if pending:
            self.logger.warning(f"Batch delete processor stopped, dropping {pending} pending deletes")
        else:
            self.logger.info("Batch delete processor stopped")

        self._buffer = {}
        self._queue = None

    async def _run(self) -> None:
        # Awaits only sleep and _flush; both honour cancellation from stop()
        while True:
            await asyncio.sleep(self.flush_interval_seconds)
            self._drain()
            await self._flush()

    def _drain(self) -> None:
        """Move every queued request into the per-owner buffer."""
        while not self._queue.empty():
            request = self._queue.get_nowait()
            self._buffer.setdefault(request.owner_id, []).extend(request.uids)

    async def _flush(self) -> None:
        """Issue one delete_many per owner with buffered UIDs, then clear the buffer."""
        buffer, self._buffer = self._buffer, {}

        for owner_id, uids in buffer.items():
            if not uids:
                continue
            try:
                await self.repository.delete_many(owner_id, uids)
            except Exception:
                self.logger.exception(f"Error deleting {len(uids)} shortlinks for owner {owner_id}")
                continue
            self.logger.info(f"Deleted {len(uids)} shortlinks for owner {owner_id}")
