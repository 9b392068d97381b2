"""
FastAPI dependencies for dependency injection.

The registry is a process-wide singleton that is injected into routes
instead of being imported as a module-level variable, so tests can swap in
a fresh instance through ``app.dependency_overrides``.
"""

from functools import lru_cache

from shorturls_app.services.url_registry import URLRegistry


@lru_cache()
def get_registry() -> URLRegistry:
    """
    Get the URL registry (singleton).

    The registry picks its short code strategy and defaults from settings.
    @lru_cache ensures this is called only once.
    """
    return URLRegistry()
