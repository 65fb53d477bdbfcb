"""Request-scoped helpers shared by the routers."""

from fastapi import HTTPException, Request, status

from shortlinks.errors import (
    IncompleteURLError,
    InvalidURLError,
    ShortenerError,
    UIDConflictError,
)
from shortlinks.service import ShortenerService


def get_service(request: Request) -> ShortenerService:
    return request.app.state.service


def get_owner_id(request: Request) -> str:
    """Owner identifier attached by OwnerCookieMiddleware."""
    owner_id = getattr(request.state, "owner_id", "")
    if not owner_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="unauthenticated")
    return owner_id


def error_status(err: ShortenerError) -> int:
    """Map a core error to an HTTP status code."""
    if isinstance(err, (InvalidURLError, IncompleteURLError)):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(err, UIDConflictError):
        return status.HTTP_409_CONFLICT
    return status.HTTP_500_INTERNAL_SERVER_ERROR
