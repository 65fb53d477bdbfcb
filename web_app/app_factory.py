"""FastAPI application factory."""

from fastapi import FastAPI

from .api import api_router
from .web import web_router
from .middleware.auth import OwnerCookieMiddleware
from .middleware.logging import LoggingMiddleware


def create_app(
    repository,
    service,
    batch_processor,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        repository: Shortlink repository instance
        service: Shortener service instance
        batch_processor: Batch delete processor instance
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Shortlinks",
        description="URL shortening service with per-owner link sets",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Store instances in app state for access in routes
    app.state.repository = repository
    app.state.service = service
    app.state.batch_processor = batch_processor
    app.state.config = config

    # LoggingMiddleware is added last, so it wraps OwnerCookieMiddleware
    app.add_middleware(OwnerCookieMiddleware)
    app.add_middleware(LoggingMiddleware)

    app.include_router(api_router, prefix="/api", tags=["API"])
    # Registered last: its /{uid} route catches every other single segment
    app.include_router(web_router, tags=["Web"])

    return app
