"""Business logic service for the shortener."""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Set

from .batch import BatchDeleteProcessor
from .common.url_builder import build_short_url
from .common.validators import validate_url
from .errors import (
    BackendUnavailableError,
    IncompleteURLError,
    InvalidURLError,
    RepositoryError,
    UIDConflictError,
    URLConflictError,
)
from .repository.base import ShortlinkRepository
from .repository.models import BatchLink, Shortlink
from .shortcode import ShortCodeGenerator


class ShortenerService:
    """Service layer for URL shortening business logic."""

    def __init__(
        self,
        repository: ShortlinkRepository,
        batch_processor: BatchDeleteProcessor,
        base_url: str,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        max_generation_attempts: int = 3,
        path_prefix: str = "",
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize shortener service.

        Args:
            repository: Storage backend
            batch_processor: Processor receiving delete requests
            base_url: Base URL short links are built on
            short_code_generator: Optional short code generator
            max_generation_attempts: UID generation attempts before giving up
            path_prefix: Optional path prefix for short URLs
            logger: Optional logger
        """
        if max_generation_attempts <= 0:
            raise ValueError("max_generation_attempts must be positive")

        self.repository = repository
        self.batch_processor = batch_processor
        self.base_url = base_url
        self.path_prefix = path_prefix
        self.generator = short_code_generator or ShortCodeGenerator()
        self.max_generation_attempts = max_generation_attempts
        self.logger = logger or logging.getLogger(__name__)

    def _validate(self, url: str) -> None:
        try:
            validate_url(url)
        except InvalidURLError as e:
            self.logger.info(f"Error parsing URL: {e}")
            raise
        except IncompleteURLError:
            self.logger.info(f"Provided URL is incomplete ({url})")
            raise

    def _prepare(self, owner_id: str, long_url: str, length: int, correlation_id: str = "") -> Shortlink:
        uid = self.generator.generate(length)
        return Shortlink(
            uid=uid,
            owner_id=owner_id,
            short=build_short_url(uid, self.base_url, self.path_prefix),
            long=long_url,
            correlation_id=correlation_id,
        )

    async def create_one(self, owner_id: str, long_url: str, length: int = 0) -> Shortlink:
        """Shorten a single URL.

        Args:
            owner_id: Identifier of the creating caller
            long_url: The URL to shorten
            length: UID length (the generator default when <= 0)

        Returns:
            The stored shortlink

        Raises:
            InvalidURLError: If the URL cannot be parsed
            IncompleteURLError: If the URL has no scheme or host
            UIDConflictError: If every generated UID was already taken
            URLConflictError: If the URL was already shortened; carries that link
            RepositoryError: If the storage backend fails
        """
        self._validate(long_url)

        for attempt in range(1, self.max_generation_attempts + 1):
            link = self._prepare(owner_id, long_url, length)
            if await self.repository.find("", link.uid) is None:
                break
            self.logger.debug(f"UID collision on attempt {attempt}: {link.uid}")
        else:
            raise UIDConflictError(
                f"no free UID after {self.max_generation_attempts} attempts"
            )

        stored, conflict = await self.repository.save(link)
        if conflict:
            self.logger.info(f"URL already shortened: {stored.long} -> {stored.short}")
            raise URLConflictError(stored)

        self.logger.info(f"URL shortened: {stored.long} -> {stored.short}")
        return stored

    async def create_batch(
        self,
        owner_id: str,
        links: Sequence[BatchLink],
        length: int = 0,
    ) -> List[Shortlink]:
        """Shorten several URLs in one all-or-nothing operation.

        Every URL is validated before anything is generated; the first invalid
        one aborts the batch. UIDs that collide with stored links, or with each
        other, are regenerated and re-checked for a bounded number of rounds.

        Args:
            owner_id: Identifier of the creating caller
            links: URLs with their correlation ids
            length: UID length (the generator default when <= 0)

        Returns:
            The stored shortlinks, in input order

        Raises:
            InvalidURLError: If a URL cannot be parsed
            IncompleteURLError: If a URL has no scheme or host
            UIDConflictError: If collisions persist after every round
            RepositoryError: If the storage backend fails
        """
        if not links:
            return []

        for item in links:
            self._validate(item.url)

        prepared = [
            self._prepare(owner_id, item.url, length, item.correlation_id)
            for item in links
        ]
        # Indexes of links whose UID has not been checked yet
        pending = list(range(len(prepared)))

        for _ in range(self.max_generation_attempts):
            found = await self.repository.find_many([prepared[i].uid for i in pending])
            taken = {link.uid for link in found}

            pending_set = set(pending)
            claimed: Set[str] = {
                link.uid for i, link in enumerate(prepared) if i not in pending_set
            }
            colliding = []
            for i in pending:
                uid = prepared[i].uid
                if uid in taken or uid in claimed:
                    colliding.append(i)
                else:
                    claimed.add(uid)

            if not colliding:
                break

            self.logger.debug(f"Regenerating {len(colliding)} colliding UIDs")
            for i in colliding:
                link = prepared[i]
                prepared[i] = self._prepare(owner_id, link.long, length, link.correlation_id)
            pending = colliding
        else:
            raise UIDConflictError(
                f"no free UIDs after {self.max_generation_attempts} rounds"
            )

        saved = await self.repository.save_batch(prepared)
        # An already shortened URL comes back as the stored link; answer with the caller's tag
        stored = [
            replace(link, correlation_id=item.correlation_id)
            for link, item in zip(saved, prepared)
        ]
        for link in stored:
            self.logger.info(f"URL shortened: {link.long} -> {link.short}")
        return stored

    async def resolve(self, uid: str) -> Optional[Shortlink]:
        """Look a UID up across all owners (the public redirect path).

        Returns:
            The link, possibly marked deleted, or None if unknown
        """
        return await self.repository.find("", uid)

    async def get_owned(self, owner_id: str, uid: str) -> Optional[Shortlink]:
        """Look a UID up among the caller's non-deleted links."""
        return await self.repository.find(owner_id, uid)

    async def list(self, owner_id: str) -> List[Shortlink]:
        """List the caller's non-deleted links."""
        return await self.repository.list(owner_id)

    async def delete_many(self, owner_id: str, uids: Sequence[str]) -> None:
        """Schedule the caller's links for deletion and return immediately."""
        if not uids:
            return
        self.batch_processor.enqueue(owner_id, uids)
        self.logger.debug(f"Queued {len(uids)} shortlinks for deletion (owner {owner_id})")

    async def ping(self) -> None:
        """Probe the storage backend.

        Raises:
            BackendUnavailableError: If the backend does not answer
        """
        try:
            await self.repository.ping()
        except RepositoryError as e:
            self.logger.info(f"Error pinging repository: {e}")
            raise BackendUnavailableError("database is unavailable") from e

    async def close(self) -> None:
        """Stop background work, back the repository up and release it."""
        await self.batch_processor.stop()
        try:
            await self.repository.backup()
        finally:
            await self.repository.close()
