from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from shorturls_app.dependencies import get_registry
from shorturls_app.schemas.url import ErrorResponse
from shorturls_app.services.url_registry import URLRegistry

router = APIRouter(tags=["redirect"])


@router.get(
    "/{short_code:path}",
    responses={404: {"model": ErrorResponse}, 410: {"model": ErrorResponse}},
)
def redirect_to_long_url(
    short_code: str,
    request: Request,
    registry: URLRegistry = Depends(get_registry)
):
    """
    Redirect to the original URL.

    The click (time, referer, geo) is recorded before redirecting.
    Unknown codes give 404, expired ones 410.
    """
    long_url = registry.resolve(short_code, referrer=request.headers.get("referer", ""))
    return RedirectResponse(url=long_url, status_code=status.HTTP_302_FOUND)
