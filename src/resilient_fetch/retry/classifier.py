"""
Retryability classifier.

Pure and synchronous: callable with nothing but a status code and the
caller's override, without network access. Rules, in order:

1. An explicit override (True or False) is returned verbatim.
2. A successful status (200-299) is never retried.
3. 503 Service Unavailable is retried.
4. Everything else (other 4xx/5xx, no status at all) is not retried.

No per-method defaults apply; GET is not implicitly retryable.
"""

from resilient_fetch.models.outcome import Outcome
from resilient_fetch.models.request import RequestDescriptor

RETRYABLE_STATUS = 503


def is_retryable(status: int | None, override: bool | None = None) -> bool:
    if override is not None:
        return override
    if status is None:
        return False
    if 200 <= status <= 299:
        return False
    return status == RETRYABLE_STATUS


def classify(outcome: Outcome, descriptor: RequestDescriptor) -> bool:
    """Decide whether the scheduler should attempt `descriptor` again after `outcome`."""
    return is_retryable(outcome.status, descriptor.retryable)
