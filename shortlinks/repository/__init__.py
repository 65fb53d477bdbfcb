"""Storage layer for shortlinks."""

from .base import ShortlinkRepository
from .memory import InMemoryShortlinkRepository
from .postgres import PostgresShortlinkRepository
from .models import Shortlink, BatchLink
from .snapshot import SnapshotStore

__all__ = [
    "ShortlinkRepository",
    "InMemoryShortlinkRepository",
    "PostgresShortlinkRepository",
    "Shortlink",
    "BatchLink",
    "SnapshotStore",
]
