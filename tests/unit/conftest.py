"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without external dependencies.
"""

from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from resilient_fetch.models.enums import TransportKind
from resilient_fetch.models.outcome import Outcome
from resilient_fetch.transport.base import BaseTransport
from resilient_fetch.transport.response import FetchResponse


@pytest.fixture
def mock_async_redis():
    """Mock AsyncRedis client for ledger tests."""
    mock = AsyncMock()
    mock.hset = AsyncMock(return_value=1)
    mock.hdel = AsyncMock(return_value=1)
    mock.hgetall = AsyncMock(return_value={})
    return mock


@pytest.fixture
def make_outcome() -> Callable[..., Outcome]:
    """Factory fixture for single-attempt outcomes.

    Usage:
        make_outcome(503)           -> SERVER_FAILURE with status 503
        make_outcome(200)           -> SUCCESS
        make_outcome(network=True)  -> NETWORK_FAILURE (ConnectError)
    """
    def _create(status: int | None = None, network: bool = False) -> Outcome:
        if network or status is None:
            return Outcome.network_failure(httpx.ConnectError("Connection refused"))
        response = FetchResponse(status=status, content=b'{"ok": true}')
        if response.ok:
            return Outcome.success(response)
        return Outcome.server_failure(response)

    return _create


@pytest.fixture
def fake_transport() -> MagicMock:
    """Fake transport whose attempt() results are set per test via side_effect."""
    mock = MagicMock(spec=BaseTransport)
    mock.kind = TransportKind.PLAIN
    mock.attempt = AsyncMock()
    return mock
