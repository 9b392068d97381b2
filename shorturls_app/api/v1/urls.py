from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from shorturls_app.dependencies import get_registry
from shorturls_app.exceptions import InvalidPathError
from shorturls_app.schemas.url import (
    ClickResponse,
    ErrorResponse,
    URLCreate,
    URLCreateResponse,
    URLStatsResponse,
    build_short_link,
)
from shorturls_app.services.url_registry import URLRegistry

router = APIRouter(prefix="/shorturls", tags=["shorturls"])


@router.post(
    "",
    response_model=URLCreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_short_url(
    url_data: URLCreate,
    registry: URLRegistry = Depends(get_registry)
):
    """Create a new short URL"""
    short_code, expires_at = registry.create(
        url_data.url,
        requested_code=url_data.shortcode,
        validity_minutes=url_data.validity,
    )
    return URLCreateResponse(short_link=build_short_link(short_code), expiry=expires_at)


@router.api_route(
    "",
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
def shorturls_method_not_allowed():
    """Only POST is served on the collection path"""
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"error": "Method not allowed"},
        headers={"Allow": "POST"},
    )


@router.get(
    "/{short_code:path}",
    response_model=URLStatsResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_url_stats(
    short_code: str,
    registry: URLRegistry = Depends(get_registry)
):
    """Click statistics for a short URL (available after expiry too)"""
    if "/" in short_code:
        raise InvalidPathError()

    stats = registry.stats(short_code)
    return URLStatsResponse(
        total_clicks=stats.total_clicks,
        original_url=stats.original_url,
        created_at=stats.created_at,
        expiry=stats.expires_at,
        clicks=[
            ClickResponse(time=click.timestamp, referrer=click.referrer, geo=click.geo)
            for click in stats.clicks
        ],
    )
