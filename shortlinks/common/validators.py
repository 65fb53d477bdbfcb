"""Validation utilities for the shortener."""

import re
from urllib.parse import urlsplit

from ..errors import IncompleteURLError, InvalidURLError

# Control characters and spaces are never valid inside a URL
_FORBIDDEN_CHARS = re.compile(r"[\x00-\x20\x7f]")
_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def validate_url(url: str) -> None:
    """Validate a long URL before it is shortened.

    Args:
        url: The URL to validate

    Raises:
        InvalidURLError: If the URL cannot be parsed
        IncompleteURLError: If the URL parses but has no scheme or no host
    """
    if not isinstance(url, str):
        raise InvalidURLError(repr(url), "URL must be a string")

    if _FORBIDDEN_CHARS.search(url):
        raise InvalidURLError(url, "URL contains whitespace or control characters")

    if _BAD_PERCENT_ESCAPE.search(url):
        raise InvalidURLError(url, "URL contains an invalid percent-escape")

    try:
        result = urlsplit(url)
        # Accessing the port validates it
        result.port
    except ValueError as e:
        raise InvalidURLError(url, str(e)) from e

    if not result.scheme or not result.hostname:
        raise IncompleteURLError(url)


def is_valid_url(url: str) -> bool:
    """Return True when validate_url accepts url."""
    try:
        validate_url(url)
    except (InvalidURLError, IncompleteURLError):
        return False
    return True
