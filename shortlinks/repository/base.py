"""Abstract base class for shortlink repository implementations."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from .models import Shortlink


class ShortlinkRepository(ABC):
    """Abstract base class for shortlink storage operations.

    UIDs are unique across all owners and at most one link exists per long
    URL. Reads made on behalf of an owner never return deleted links; the
    unscoped lookup does, so callers can tell "gone" from "unknown".
    """

    async def connect(self) -> None:
        """Open connections and prepare storage. No-op by default."""

    @abstractmethod
    async def save(self, link: Shortlink) -> Tuple[Shortlink, bool]:
        """Store a new shortlink.

        Args:
            link: The link to store

        Returns:
            Tuple of (stored link, conflict). When a link with the same long
            URL already exists, that link is returned with conflict=True and
            nothing is written.
        """

    @abstractmethod
    async def save_batch(self, links: Sequence[Shortlink]) -> List[Shortlink]:
        """Store several links atomically.

        Args:
            links: Links to store

        Returns:
            The resolved links, in input order

        Raises:
            RepositoryError: If any link fails; nothing is stored then
        """

    @abstractmethod
    async def find(self, owner_id: str, uid: str) -> Optional[Shortlink]:
        """Find a link by UID.

        Args:
            owner_id: Owner to search within; empty string searches all owners
            uid: The short code

        Returns:
            The link, or None if not found
        """

    @abstractmethod
    async def find_many(self, uids: Sequence[str]) -> List[Shortlink]:
        """Return every stored link whose UID is in uids, across all owners."""

    @abstractmethod
    async def list(self, owner_id: str) -> List[Shortlink]:
        """Return all non-deleted links owned by owner_id."""

    @abstractmethod
    async def delete_many(self, owner_id: str, uids: Sequence[str]) -> None:
        """Mark the owner's matching links as deleted. Unknown UIDs are ignored."""

    @abstractmethod
    async def ping(self) -> None:
        """Check that the backend is alive.

        Raises:
            RepositoryError: If the backend does not answer in time
        """

    @abstractmethod
    async def backup(self) -> None:
        """Persist the full state, if the backend is volatile."""

    @abstractmethod
    async def restore(self) -> None:
        """Load previously persisted state. A missing snapshot is not an error."""

    @abstractmethod
    async def close(self) -> None:
        """Release all resources."""
