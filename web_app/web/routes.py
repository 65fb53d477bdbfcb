"""Plain-text and redirect routes served at the site root."""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse, Response

from shortlinks.common.logging_config import get_logger
from shortlinks.errors import BackendUnavailableError, ShortenerError, URLConflictError
from shortlinks.service import ShortenerService

from ..dependencies import error_status, get_owner_id, get_service

router = APIRouter()
logger = get_logger("web")


@router.get("/ping", response_class=PlainTextResponse, summary="Storage liveness probe")
async def ping(service: ShortenerService = Depends(get_service)):
    """Report whether the storage backend answers."""
    try:
        await service.ping()
    except BackendUnavailableError as e:
        return PlainTextResponse(str(e), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return PlainTextResponse("OK")


@router.post("/", response_class=PlainTextResponse, summary="Create short URL from a plain-text body")
async def create_shortlink(
    request: Request,
    owner_id: str = Depends(get_owner_id),
    service: ShortenerService = Depends(get_service),
):
    """Shorten the URL sent as the raw request body."""
    body = await request.body()
    long_url = body.decode("utf-8", errors="replace").strip()

    try:
        link = await service.create_one(owner_id, long_url)
    except URLConflictError as e:
        return PlainTextResponse(e.link.short, status_code=status.HTTP_409_CONFLICT)
    except ShortenerError as e:
        logger.info(f"Error creating shortlink: {e}")
        return PlainTextResponse(str(e), status_code=error_status(e))

    return PlainTextResponse(link.short, status_code=status.HTTP_201_CREATED)


@router.get("/{uid}", summary="Redirect to the original URL")
async def redirect(uid: str, service: ShortenerService = Depends(get_service)):
    """Redirect a short code to its original URL."""
    try:
        link = await service.resolve(uid)
    except ShortenerError as e:
        logger.error(f"Error getting shortlink: {e}")
        return PlainTextResponse(str(e), status_code=error_status(e))

    if link is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    if link.deleted:
        return Response(status_code=status.HTTP_410_GONE)

    return RedirectResponse(url=link.long, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
