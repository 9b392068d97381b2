"""
Test configuration and fixtures for the short URL service.
This centralizes all test setup, making individual tests clean.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from main import app
from shorturls_app.dependencies import get_registry
from shorturls_app.services.short_code_strategies import RandomShortCodeStrategy
from shorturls_app.services.url_registry import URLRegistry


class FakeClock:
    """Manually advanced clock so expiry can be tested without sleeping"""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture(scope="function")
def clock():
    return FakeClock(datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture(scope="function")
def registry(clock):
    """
    Fresh registry for each test.
    This ensures tests are isolated and don't affect each other.
    """
    return URLRegistry(
        short_code_strategy=RandomShortCodeStrategy(length=6, max_retries=10),
        default_validity_minutes=30,
        geo="IN",
        clock=clock,
    )


@pytest.fixture(scope="function")
def client(registry):
    """
    Create a test client with the registry dependency overridden.
    This is the main fixture that tests will use.
    """
    app.dependency_overrides[get_registry] = lambda: registry

    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()
