"""API routes implementation."""

from typing import List

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse

from shortlinks.common.logging_config import get_logger
from shortlinks.errors import ShortenerError, URLConflictError
from shortlinks.repository.models import BatchLink
from shortlinks.service import ShortenerService

from ..dependencies import error_status, get_owner_id, get_service
from .schemas import (
    BatchShortenItem,
    BatchShortenResult,
    ErrorResponse,
    ShortenRequest,
    ShortenResponse,
    UserURL,
)

router = APIRouter()
logger = get_logger("web")


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid or incomplete URL"},
        409: {"model": ShortenResponse, "description": "URL already shortened"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
)
async def shorten_url(
    body: ShortenRequest,
    owner_id: str = Depends(get_owner_id),
    service: ShortenerService = Depends(get_service),
):
    """Create a shortened URL."""
    try:
        link = await service.create_one(owner_id, body.url)
    except URLConflictError as e:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=ShortenResponse(result=e.link.short).model_dump(),
        )
    except ShortenerError as e:
        logger.info(f"Error creating shortlink: {e}")
        raise HTTPException(status_code=error_status(e), detail=str(e))

    return ShortenResponse(result=link.short)


@router.post(
    "/shorten/batch",
    response_model=List[BatchShortenResult],
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid or incomplete URL"},
        409: {"model": ErrorResponse, "description": "No free short code"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URLs in batch",
)
async def shorten_batch(
    body: List[BatchShortenItem],
    owner_id: str = Depends(get_owner_id),
    service: ShortenerService = Depends(get_service),
):
    """Create several shortened URLs at once; all of them or none are stored."""
    links = [BatchLink(url=item.original_url, correlation_id=item.correlation_id) for item in body]

    try:
        created = await service.create_batch(owner_id, links)
    except ShortenerError as e:
        logger.info(f"Error creating shortlinks: {e}")
        raise HTTPException(status_code=error_status(e), detail=str(e))

    return [
        BatchShortenResult(correlation_id=link.correlation_id, short_url=link.short)
        for link in created
    ]


@router.get(
    "/user/urls",
    response_model=List[UserURL],
    responses={204: {"description": "The caller owns no links"}},
    summary="List own URLs",
)
async def list_user_urls(
    owner_id: str = Depends(get_owner_id),
    service: ShortenerService = Depends(get_service),
):
    """List the caller's links."""
    try:
        links = await service.list(owner_id)
    except ShortenerError as e:
        logger.error(f"Error listing shortlinks: {e}")
        raise HTTPException(status_code=error_status(e), detail=str(e))

    if not links:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return [UserURL(short_url=link.short, original_url=link.long) for link in links]


@router.delete(
    "/user/urls",
    status_code=status.HTTP_202_ACCEPTED,
    summary="Delete own URLs",
    description="Schedule the caller's links for deletion. Returns before they are deleted.",
)
async def delete_user_urls(
    uids: List[str] = Body(...),
    owner_id: str = Depends(get_owner_id),
    service: ShortenerService = Depends(get_service),
):
    """Schedule deletion of the caller's links."""
    await service.delete_many(owner_id, uids)
    return Response(status_code=status.HTTP_202_ACCEPTED)
