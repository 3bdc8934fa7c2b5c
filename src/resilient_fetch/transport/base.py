"""
Abstract base transport.

Defines the single capability every transport variant implements:
perform exactly one network attempt and report it as an Outcome. This
abstraction keeps the schedulers free of any knowledge about payload
shapes or progress instrumentation.
"""

import time
from abc import ABC, abstractmethod
from typing import Any

import httpx
import structlog

from resilient_fetch.cancellation import run_until_cancelled
from resilient_fetch.exceptions import AbortError
from resilient_fetch.models.enums import TransportKind
from resilient_fetch.models.outcome import Outcome
from resilient_fetch.models.request import MultipartForm, RequestDescriptor
from resilient_fetch.monitoring.metrics import fetch_attempts_total
from resilient_fetch.transport.response import FetchResponse

logger = structlog.get_logger(__name__)

# No response at all: the peer is unreachable or went away mid-exchange
NETWORK_ERRORS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
    httpx.ProxyError,
)


class BaseTransport(ABC):
    """
    Abstract base class for single-attempt transports.

    Responsibilities:
    - Translate a RequestDescriptor into an httpx request
    - Send it once, racing the descriptor's CancelSignal
    - Map the result (or failure) to an Outcome

    Does NOT handle:
    - Retrying (that's the schedulers' job)
    - Deciding whether an outcome is retryable (that's the classifier's job)
    """

    kind: TransportKind

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    @abstractmethod
    def build_request(self, url: str, descriptor: RequestDescriptor) -> httpx.Request:
        """Build the httpx request for one attempt."""

    async def attempt(self, url: str, descriptor: RequestDescriptor) -> Outcome:
        """
        Perform one network attempt.

        Never raises for network, protocol or HTTP-status failures; those
        are returned as Outcome variants.
        """
        start_time = time.time()
        try:
            request = self.build_request(url, descriptor)
            response = await run_until_cancelled(
                self._client.send(request), descriptor.cancel_signal
            )
        except AbortError as e:
            outcome = Outcome.aborted(e)
        except NETWORK_ERRORS as e:
            outcome = Outcome.network_failure(e)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            outcome = Outcome.request_failure(e)
        else:
            fetch_response = FetchResponse.from_httpx(response)
            if fetch_response.ok:
                outcome = Outcome.success(fetch_response)
            else:
                outcome = Outcome.server_failure(fetch_response)

        latency_ms = int((time.time() - start_time) * 1000)
        fetch_attempts_total.labels(transport=self.kind.value, outcome=outcome.kind.value).inc()
        logger.debug(
            "Transport attempt finished",
            transport=self.kind.value,
            method=descriptor.method,
            url=url,
            outcome=outcome.kind.value,
            status=outcome.status,
            error=type(outcome.error).__name__ if outcome.error else None,
            latency_ms=latency_ms,
        )
        return outcome

    def wire_headers(self, descriptor: RequestDescriptor) -> dict[str, str]:
        """
        Headers to put on the wire.

        A caller-supplied Content-Type is dropped for multipart bodies: httpx
        must generate it to carry the boundary.
        """
        headers = dict(descriptor.headers)
        if isinstance(descriptor.body, MultipartForm):
            headers = {k: v for k, v in headers.items() if k.lower() != "content-type"}
        return headers

    @staticmethod
    def body_kwargs(body: Any) -> dict[str, Any]:
        """Map the descriptor body onto httpx request arguments."""
        if body is None:
            return {}
        if isinstance(body, MultipartForm):
            # httpx only switches to multipart when files are present
            return {"data": dict(body.fields), "files": dict(body.files) or None}
        if isinstance(body, (bytes, bytearray, memoryview)):
            return {"content": bytes(body)}
        if isinstance(body, str):
            return {"content": body}
        return {"json": body}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind.value})"
