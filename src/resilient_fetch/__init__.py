"""
Resilient HTTP request orchestrator.

Wraps single HTTP exchanges with:
- Retryability classification (explicit override, 2xx, 503)
- Bounded exponential backoff for retryable server failures
- Separate patient retry for pure network failures (offline, DNS, reset)
- Upload progress reporting with a smoothed speed estimate
- Cooperative cancellation through a shared CancelSignal

Architecture: RequestOrchestrator -> transport selection -> schedulers -> classifier
"""

__version__ = "0.1.0"

from resilient_fetch.cancellation import CancelSignal
from resilient_fetch.exceptions import (
    AbortError,
    ClientFailure,
    DecodeError,
    FetchError,
    NetworkError,
    RequestFailed,
    ResponseFailure,
    RetryExhausted,
    ServerFailure,
)
from resilient_fetch.models.progress import ProgressEvent
from resilient_fetch.models.request import FetchOptions, MultipartForm
from resilient_fetch.orchestrator import RequestOrchestrator, fetch
from resilient_fetch.transport.response import FetchResponse

__all__ = [
    "AbortError",
    "CancelSignal",
    "ClientFailure",
    "DecodeError",
    "FetchError",
    "FetchOptions",
    "FetchResponse",
    "MultipartForm",
    "NetworkError",
    "ProgressEvent",
    "RequestFailed",
    "RequestOrchestrator",
    "ResponseFailure",
    "RetryExhausted",
    "ServerFailure",
    "fetch",
]
