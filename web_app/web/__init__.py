"""Root-level routes: plain-text shortening, redirects and the liveness probe."""

from .routes import router as web_router

__all__ = ["web_router"]
