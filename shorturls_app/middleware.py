"""
Request logging middleware.

Logs method, path and time of every request, then hands it on unchanged.
"""

import logging
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from shorturls_app.schemas.url import to_rfc3339

logger = logging.getLogger("shorturls_app.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        logger.info(
            "Request - Method: %s, Path: %s, Time: %s",
            request.method,
            request.url.path,
            to_rfc3339(datetime.now(timezone.utc)),
        )
        return await call_next(request)
