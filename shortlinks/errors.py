"""Error taxonomy for the shortlinks core."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .repository.models import Shortlink


class ShortenerError(Exception):
    """Base class for all shortlinks errors."""


class InvalidURLError(ShortenerError, ValueError):
    """The submitted URL could not be parsed."""

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        self.reason = reason
        message = f"provided URL is invalid: {url!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class IncompleteURLError(ShortenerError, ValueError):
    """The submitted URL parsed but lacks a scheme or a host."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(
            f"provided URL is incomplete (e.g. missing scheme or host): {url!r}"
        )


class UIDConflictError(ShortenerError):
    """No free UID could be generated within the allowed attempts."""


class URLConflictError(ShortenerError):
    """The long URL was already shortened; carries the existing link."""

    def __init__(self, link: "Shortlink"):
        self.link = link
        super().__init__(f"URL already shortened: {link.long} -> {link.short}")


class BackendUnavailableError(ShortenerError):
    """The storage backend failed its liveness probe."""


class RepositoryError(ShortenerError):
    """A storage operation failed."""


class SnapshotError(ShortenerError):
    """A snapshot file could not be read or written."""
