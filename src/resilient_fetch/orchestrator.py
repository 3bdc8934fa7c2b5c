"""
Request orchestrator.

Single entry point for resilient fetches. Per call:

1. Freeze the options into a RequestDescriptor and generate a request id
2. Report the start to the tracker (read/write class)
3. Select the transport once (plain or progress)
4. Run the bounded scheduler; on a pure network failure hand over to the
   network-failure scheduler
5. Report the end to the tracker and return the response or raise the
   terminal error

Usage:
    async with RequestOrchestrator(tracker=InMemoryRequestTracker()) as orchestrator:
        response = await orchestrator.fetch(url, FetchOptions(method="POST", body={...}))
"""

import inspect
import time
import uuid
from typing import Callable, Optional

import httpx
import structlog

from resilient_fetch.config import Settings, settings as default_settings
from resilient_fetch.exceptions import (
    AbortError,
    ClientFailure,
    FetchError,
    NetworkError,
    RequestFailed,
    ResponseFailure,
    RetryExhausted,
    ServerFailure,
)
from resilient_fetch.models.enums import OutcomeKind, RequestClass
from resilient_fetch.models.request import FetchOptions, RequestDescriptor
from resilient_fetch.monitoring.metrics import fetch_request_duration_seconds, fetch_requests_total
from resilient_fetch.retry.metadata import RetryResult
from resilient_fetch.retry.schedulers import BoundedRetryScheduler, NetworkRetryScheduler
from resilient_fetch.tracking.base import RequestTracker
from resilient_fetch.transport.response import FetchResponse
from resilient_fetch.transport.selection import select_transport

logger = structlog.get_logger(__name__)

RESULT_LABELS: dict[type[FetchError], str] = {
    ClientFailure: "client_failure",
    ServerFailure: "server_failure",
    RetryExhausted: "retry_exhausted",
    ResponseFailure: "response_failure",
    NetworkError: "network_error",
    RequestFailed: "request_failed",
    AbortError: "aborted",
}


def default_request_id() -> str:
    return uuid.uuid4().hex


def resolve_result(result: RetryResult) -> FetchResponse:
    """
    Turn the final scheduler result into a response or a terminal error.

    Raises:
        AbortError: The call was cancelled
        NetworkError: No response could be obtained
        RequestFailed: Statusless failure that is not network loss
        RetryExhausted: Retryable failures consumed every attempt
        ClientFailure: Terminal 4xx
        ServerFailure: Terminal 5xx
        ResponseFailure: Any other terminal non-2xx status
    """
    outcome = result.outcome

    if outcome.kind is OutcomeKind.SUCCESS:
        return outcome.response

    if outcome.kind is OutcomeKind.ABORTED:
        if isinstance(outcome.error, AbortError):
            raise outcome.error
        raise AbortError("Request cancelled") from outcome.error

    details = {"attempts": result.attempts, "network_cycles": result.network_cycles}

    if outcome.kind is OutcomeKind.NETWORK_FAILURE:
        raise NetworkError(
            f"Network error: {outcome.error}",
            details={**details, "error_type": type(outcome.error).__name__},
        ) from outcome.error

    if outcome.kind is OutcomeKind.REQUEST_FAILURE:
        raise RequestFailed(
            f"Request failed: {outcome.error}",
            details={**details, "error_type": type(outcome.error).__name__},
        ) from outcome.error

    response = outcome.response
    details["status"] = response.status

    if result.exhausted:
        raise RetryExhausted(
            f"Retry attempts exhausted after {result.attempts} attempts (status {response.status})",
            response=response,
            attempts=result.attempts,
            details=details,
        )
    if 400 <= response.status <= 499:
        error_class: type[ResponseFailure] = ClientFailure
    elif 500 <= response.status <= 599:
        error_class = ServerFailure
    else:
        error_class = ResponseFailure
    raise error_class(
        f"Request failed with status {response.status} {response.status_text}".rstrip(),
        response=response,
        attempts=result.attempts,
        details=details,
    )


class RequestOrchestrator:
    """
    Resilient fetch entry point.

    Holds no per-call state, so any number of fetch() calls may run
    concurrently on one instance. The only shared collaborator is the
    optional tracker, which sees a distinct id per call.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        tracker: Optional[RequestTracker] = None,
        client: Optional[httpx.AsyncClient] = None,
        id_factory: Callable[[], str] = default_request_id,
    ):
        """
        Initialize orchestrator.

        Args:
            settings: Application settings (defaults to the module-level instance)
            tracker: Optional request ledger notified of call start/end
            client: Optional httpx client; injected clients are not closed by close()
            id_factory: Generator of opaque unique request ids
        """
        self.settings = settings or default_settings
        self.tracker = tracker
        self._id_factory = id_factory
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.HTTP_TIMEOUT),
                follow_redirects=self.settings.HTTP_FOLLOW_REDIRECTS,
            )
            self._owns_client = True
            logger.debug("Created new httpx AsyncClient")
        return self._client

    async def fetch(
        self,
        url: str,
        options: Optional[FetchOptions] = None,
        max_attempts: Optional[int] = None,
        base_delay_ms: Optional[int] = None,
        offline_retry: Optional[bool] = None,
    ) -> FetchResponse:
        """
        Perform a resilient request.

        Args:
            url: Target endpoint
            options: Method, headers, body, retry override, cancel signal, progress sink
            max_attempts: Bounded retry budget (default FETCH_MAX_ATTEMPTS)
            base_delay_ms: First backoff wait (default FETCH_BASE_DELAY_MS)
            offline_retry: Keep retrying pure network failures until online
                (default OFFLINE_RETRY)

        Returns:
            FetchResponse with a 2xx status

        Raises:
            RetryExhausted, ClientFailure, ServerFailure, NetworkError,
            RequestFailed, AbortError (all FetchError subclasses)
        """
        descriptor = RequestDescriptor.from_options(url, options)
        request_id = self._id_factory()
        request_class = descriptor.request_class
        log = logger.bind(request_id=request_id, method=descriptor.method, url=url)

        max_attempts = max_attempts if max_attempts is not None else self.settings.FETCH_MAX_ATTEMPTS
        base_delay_ms = base_delay_ms if base_delay_ms is not None else self.settings.FETCH_BASE_DELAY_MS
        offline_retry = offline_retry if offline_retry is not None else self.settings.OFFLINE_RETRY

        await self._notify("record_start", request_id, request_class)
        start_time = time.time()
        result_label = "error"

        try:
            client = await self._get_client()
            transport = select_transport(descriptor, client, self.settings)
            log.debug("Request started", request_class=request_class.value, transport=transport.kind.value)

            bounded = BoundedRetryScheduler(
                transport,
                max_attempts=max_attempts,
                base_delay_ms=base_delay_ms,
                max_delay_ms=self.settings.FETCH_MAX_DELAY_MS,
                backoff_factor=self.settings.FETCH_BACKOFF_FACTOR,
            )
            result = await bounded.run(url, descriptor)

            if result.outcome.is_network_failure:
                log.warning(
                    "No response received, switching to network-failure retry",
                    offline_retry=offline_retry,
                    error=repr(result.outcome.error),
                )
                network = NetworkRetryScheduler(
                    bounded,
                    interval_ms=self.settings.NETWORK_RETRY_INTERVAL_MS,
                    offline_retry=offline_retry,
                )
                result = await network.run(url, descriptor)

            response = resolve_result(result)
            result_label = "success"
            log.info("Request succeeded", status=response.status, attempts=result.attempts)
            return response

        except FetchError as e:
            result_label = RESULT_LABELS.get(type(e), "error")
            log.info("Request failed", result=result_label, error=e.message)
            raise

        finally:
            fetch_requests_total.labels(request_class=request_class.value, result=result_label).inc()
            fetch_request_duration_seconds.labels(request_class=request_class.value).observe(
                time.time() - start_time
            )
            await self._notify("record_end", request_id, request_class)

    async def _notify(self, method: str, request_id: str, request_class: RequestClass) -> None:
        """Best-effort tracker notification; failures are logged, never raised."""
        if self.tracker is None:
            return
        try:
            result = getattr(self.tracker, method)(request_id, request_class.value)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.warning(
                "Request tracker notification failed",
                tracker_method=method,
                request_id=request_id,
                error=str(e),
                error_type=type(e).__name__,
            )

    async def close(self) -> None:
        """Close the HTTP client if this orchestrator created it."""
        if self._client is not None and self._owns_client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed httpx AsyncClient")

    async def __aenter__(self) -> "RequestOrchestrator":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"RequestOrchestrator(tracker={self.tracker!r})"


async def fetch(
    url: str,
    options: Optional[FetchOptions] = None,
    max_attempts: Optional[int] = None,
    base_delay_ms: Optional[int] = None,
    offline_retry: Optional[bool] = None,
    *,
    settings: Optional[Settings] = None,
    tracker: Optional[RequestTracker] = None,
) -> FetchResponse:
    """One-off fetch through a throwaway orchestrator (no tracker unless given)."""
    async with RequestOrchestrator(settings=settings, tracker=tracker) as orchestrator:
        return await orchestrator.fetch(
            url,
            options,
            max_attempts=max_attempts,
            base_delay_ms=base_delay_ms,
            offline_retry=offline_retry,
        )
