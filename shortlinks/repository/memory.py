"""In-memory shortlink repository with optional file snapshots."""

import asyncio
import logging
from dataclasses import replace
from typing import Dict, List, Optional, Sequence, Tuple

from ..errors import RepositoryError
from .snapshot import SnapshotStore
from .base import ShortlinkRepository
from .models import Shortlink


class InMemoryShortlinkRepository(ShortlinkRepository):
    """Volatile repository keeping every link in process memory.

    Links are held in a two-level mapping owner_id -> uid -> Shortlink, with
    secondary indexes by UID and by long URL. One coarse lock guards all three
    structures; every critical section is short and free of awaits.
    """

    def __init__(
        self,
        snapshot: Optional[SnapshotStore] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize in-memory repository.

        Args:
            snapshot: Store used by backup() and restore()
            logger: Optional logger instance
        """
        self.snapshot = snapshot or SnapshotStore()
        self.logger = logger or logging.getLogger(__name__)

        #           owner_id  uid
        self._links: Dict[str, Dict[str, Shortlink]] = {}
        self._by_uid: Dict[str, Shortlink] = {}
        self._by_long: Dict[str, Shortlink] = {}
        self._lock = asyncio.Lock()

    def _insert(self, link: Shortlink) -> None:
        stored = replace(link)
        self._links.setdefault(stored.owner_id, {})[stored.uid] = stored
        self._by_uid[stored.uid] = stored
        self._by_long.setdefault(stored.long, stored)

    async def save(self, link: Shortlink) -> Tuple[Shortlink, bool]:
        async with self._lock:
            existing = self._by_long.get(link.long)
            if existing is not None:
                return replace(existing), True

            if link.uid in self._by_uid:
                raise RepositoryError(f"save shortlink: UID {link.uid!r} already exists")

            self._insert(link)
            return replace(link), False

    async def save_batch(self, links: Sequence[Shortlink]) -> List[Shortlink]:
        async with self._lock:
            # Validate the whole batch before mutating anything
            seen_uids = set()
            for link in links:
                if link.uid in self._by_uid or link.uid in seen_uids:
                    raise RepositoryError(
                        f"save shortlinks: UID {link.uid!r} already exists"
                    )
                seen_uids.add(link.uid)

            result = []
            for link in links:
                existing = self._by_long.get(link.long)
                if existing is not None:
                    result.append(replace(existing))
                    continue
                self._insert(link)
                result.append(replace(link))

            return result

    async def find(self, owner_id: str, uid: str) -> Optional[Shortlink]:
        async with self._lock:
            # If owner_id is not specified, search all links
            if not owner_id:
                link = self._by_uid.get(uid)
                return replace(link) if link is not None else None

            link = self._links.get(owner_id, {}).get(uid)
            if link is None or link.deleted:
                return None
            return replace(link)

    async def find_many(self, uids: Sequence[str]) -> List[Shortlink]:
        if not uids:
            return []

        async with self._lock:
            found = []
            for uid in dict.fromkeys(uids):
                link = self._by_uid.get(uid)
                if link is not None:
                    found.append(replace(link))
            return found

    async def list(self, owner_id: str) -> List[Shortlink]:
        async with self._lock:
            return [
                replace(link)
                for link in self._links.get(owner_id, {}).values()
                if not link.deleted
            ]

    async def delete_many(self, owner_id: str, uids: Sequence[str]) -> None:
        if not uids:
            return

        async with self._lock:
            owned = self._links.get(owner_id, {})
            for uid in uids:
                link = owned.get(uid)
                if link is not None:
                    link.deleted = True

    async def ping(self) -> None:
        return None

    async def backup(self) -> None:
        async with self._lock:
            links = [replace(link) for link in self._by_uid.values()]

        await asyncio.to_thread(self.snapshot.write, links)

    async def restore(self) -> None:
        links = await asyncio.to_thread(self.snapshot.read)

        async with self._lock:
            for link in links:
                previous = self._by_uid.get(link.uid)
                if previous is not None:
                    self._links.get(previous.owner_id, {}).pop(previous.uid, None)
                    if self._by_long.get(previous.long) is previous:
                        del self._by_long[previous.long]
                self._insert(link)

        self.logger.info(f"Restored {len(links)} shortlinks")

    async def close(self) -> None:
        self.snapshot.close()
