"""Middleware for the shortlinks web app."""

from .auth import OwnerCookieMiddleware
from .logging import LoggingMiddleware

__all__ = ["OwnerCookieMiddleware", "LoggingMiddleware"]
