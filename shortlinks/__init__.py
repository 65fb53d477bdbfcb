"""Core shortlink persistence and generation engine."""

from .shortcode import ShortCodeGenerator
from .batch import BatchDeleteProcessor
from .service import ShortenerService

__version__ = "1.0.0"

__all__ = ["ShortCodeGenerator", "BatchDeleteProcessor", "ShortenerService"]
