import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shorturls_app.config import settings
from shorturls_app.api.v1 import urls, redirect
from shorturls_app.exceptions import (
    GenerationExhaustedError,
    InvalidInputError,
    InvalidPathError,
    RegistryError,
    ShortcodeExpiredError,
    ShortcodeNotFoundError,
    ShortcodeTakenError,
)
from shorturls_app.middleware import RequestLoggingMiddleware

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# HTTP status for each registry error
ERROR_STATUS_CODES = {
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    ShortcodeTakenError: status.HTTP_400_BAD_REQUEST,
    InvalidPathError: status.HTTP_400_BAD_REQUEST,
    ShortcodeNotFoundError: status.HTTP_404_NOT_FOUND,
    ShortcodeExpiredError: status.HTTP_410_GONE,
    GenerationExhaustedError: status.HTTP_503_SERVICE_UNAVAILABLE,
}

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A URL shortener service with click analytics",
    debug=settings.debug,
    # Every GET path outside /shorturls belongs to the redirect catch-all
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(RegistryError)
async def registry_error_handler(request: Request, exc: RegistryError):
    """Translate registry errors into {"error": ...} bodies"""
    status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Unparsable or incomplete create bodies"""
    logger.debug(f"Rejected body for {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": InvalidInputError.message},
    )


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}


######## Include routers
# Order matters: the redirect router catches every remaining GET path
app.include_router(urls.router)
app.include_router(redirect.router)


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Server running at {settings.base_url}")
    uvicorn.run(app, host=settings.host, port=settings.port)
