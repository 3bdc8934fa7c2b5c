"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across the unit tests.
"""

from typing import Callable

import httpx
import pytest

from resilient_fetch.config import Settings
from resilient_fetch.models.request import FetchOptions, RequestDescriptor


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with waits shrunk to a millisecond.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.UPLOAD_CHUNK_SIZE = 10
    """
    return Settings(
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        FETCH_MAX_ATTEMPTS=5,
        FETCH_BASE_DELAY_MS=1,
        FETCH_MAX_DELAY_MS=5,
        NETWORK_RETRY_INTERVAL_MS=1,
        OFFLINE_RETRY=True,
        HTTP_TIMEOUT=5.0,
        UPLOAD_CHUNK_SIZE=1024,
        SPEED_WINDOW_SIZE=10,
        REDIS_URL="redis://localhost:6379/0",
        TRACKER_KEY_PREFIX="fetch-requests-test",
    )


@pytest.fixture
def make_client() -> Callable[..., httpx.AsyncClient]:
    """Factory fixture wiring an httpx client to an in-process handler.

    Usage:
        def test_something(make_client):
            client = make_client(lambda request: httpx.Response(200))
    """
    def _create(handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _create


@pytest.fixture
def make_descriptor() -> Callable[..., RequestDescriptor]:
    """Factory fixture to create RequestDescriptor with custom options."""
    def _create(url: str = "https://api.example.com/items", **options) -> RequestDescriptor:
        return RequestDescriptor.from_options(url, FetchOptions(**options))

    return _create
