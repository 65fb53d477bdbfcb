"""JSON API for the shortlinks service."""

from .routes import router as api_router

__all__ = ["api_router"]
