"""
Caller-facing exceptions for orchestrated fetches.

Only terminal outcomes are turned into exceptions: the schedulers pass
attempt outcomes around as values, and the orchestrator raises one of these
once nothing is left to retry. Callers can special-case user-initiated
cancellation by catching AbortError.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from resilient_fetch.transport.response import FetchResponse


class FetchError(Exception):
    """
    Base exception for all orchestrated fetch errors.

    All fetch-specific exceptions inherit from this to allow catching
    any failure with a single except clause.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ResponseFailure(FetchError):
    """
    Raised when a response was received but it was not successful.

    Attributes:
        response: The last response received (body still readable)
        attempts: Number of attempts made by the bounded scheduler
    """

    def __init__(
        self,
        message: str,
        response: "FetchResponse",
        attempts: int,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.response = response
        self.attempts = attempts

    @property
    def status(self) -> int:
        return self.response.status


class ClientFailure(ResponseFailure):
    """Terminal 4xx response. Never retried unless retryable=True was given."""


class ServerFailure(ResponseFailure):
    """
    Terminal 5xx response the classifier refused to retry.

    Everything but 503 lands here by default, so a confirmed-failing server
    is not hammered and timed-out writes are not duplicated.
    """


class RetryExhausted(ResponseFailure):
    """Raised when every attempt was deemed retryable and all were consumed."""


class NetworkError(FetchError):
    """
    Raised when no response could be obtained at all.

    Covers DNS failures, refused/reset connections and timeouts, after the
    network-failure scheduler gave up (only possible with offline_retry=False).
    """


class RequestFailed(FetchError):
    """
    Raised for statusless failures that are not network loss.

    Examples: invalid URL, unsupported scheme, local protocol violation,
    redirect loops. Retrying would produce the same failure, so these skip
    the network-failure scheduler.
    """


class AbortError(FetchError):
    """Raised when the caller's CancelSignal fired before the call concluded."""


class DecodeError(FetchError):
    """Raised by FetchResponse.json() when the body is not valid JSON."""
