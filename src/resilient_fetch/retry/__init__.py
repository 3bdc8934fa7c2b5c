"""
Retry classification and scheduling.

Two-tier policy:

1. **Bounded retry**: exponential backoff (base delay doubling, capped at
   5000 ms) for outcomes the classifier deems retryable (503 or explicit
   retryable=True)
2. **Network-failure retry**: fixed-interval re-runs of the bounded flow
   while no response can be obtained, once or indefinitely (offline_retry)

Main Components:
    - classify / is_retryable: Pure retryability rules
    - BoundedRetryScheduler: Attempt loop with backoff
    - NetworkRetryScheduler: Offline patience around the bounded loop
    - AttemptContext / RetryResult: Run state and run result

Usage:
    >>> from resilient_fetch.retry import BoundedRetryScheduler
    >>> scheduler = BoundedRetryScheduler(transport, max_attempts=3)
    >>> result = await scheduler.run(url, descriptor)
"""

from resilient_fetch.retry.classifier import RETRYABLE_STATUS, classify, is_retryable
from resilient_fetch.retry.metadata import AttemptContext, RetryResult
from resilient_fetch.retry.schedulers import BoundedRetryScheduler, NetworkRetryScheduler

__all__ = [
    "AttemptContext",
    "BoundedRetryScheduler",
    "NetworkRetryScheduler",
    "RETRYABLE_STATUS",
    "RetryResult",
    "classify",
    "is_retryable",
]
