"""Common utilities for the shortlinks service."""

from .validators import validate_url, is_valid_url
from .url_builder import build_short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "validate_url",
    "is_valid_url",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
