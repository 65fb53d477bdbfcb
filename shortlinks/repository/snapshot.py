"""File snapshots of the in-memory shortlink set."""

import json
import logging
import os
import tempfile
from typing import List, Optional, Sequence

from ..errors import SnapshotError
from .models import Shortlink


class SnapshotStore:
    """Serialize and restore the full link set to a JSON file.

    A store created without a path is disabled: writes are dropped and reads
    return nothing.
    """

    def __init__(self, path: Optional[str] = None, logger: Optional[logging.Logger] = None):
        """Initialize snapshot store.

        Args:
            path: Snapshot file path (None or "" disables snapshots)
            logger: Optional logger instance
        """
        self.path = path or None
        self.logger = logger or logging.getLogger(__name__)

    @property
    def enabled(self) -> bool:
        return self.path is not None

    def write(self, links: Sequence[Shortlink]) -> None:
        """Replace the snapshot with links.

        The records go to a temporary file next to the target which then
        replaces it, so a crash mid-write leaves the previous snapshot intact.
        """
        if not self.enabled:
            return

        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=".snapshot-", suffix=".tmp", dir=directory)
        except OSError as e:
            raise SnapshotError(f"write snapshot {self.path}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump([link.to_dict() for link in links], f)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise SnapshotError(f"write snapshot {self.path}") from e

        self.logger.info(f"Snapshot written: {len(links)} shortlinks -> {self.path}")

    def read(self) -> List[Shortlink]:
        """Load the links stored in the snapshot.

        Returns:
            The stored links; empty when the file is absent or empty

        Raises:
            SnapshotError: If the file exists but cannot be decoded
        """
        if not self.enabled:
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read()
        except FileNotFoundError:
            self.logger.info(f"No snapshot at {self.path}, nothing to restore")
            return []
        except OSError as e:
            raise SnapshotError(f"read snapshot {self.path}") from e

        if not content.strip():
            return []

        try:
            records = json.loads(content)
            links = [Shortlink.from_dict(record) for record in records or []]
        except (ValueError, KeyError, TypeError) as e:
            raise SnapshotError(f"decode snapshot {self.path}") from e

        self.logger.info(f"Snapshot read: {len(links)} shortlinks <- {self.path}")
        return links

    def close(self) -> None:
        """Nothing to release: the file is only open during read and write."""
