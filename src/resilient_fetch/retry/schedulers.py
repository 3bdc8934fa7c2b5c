"""
Retry schedulers.

Two tiers, because "no response" and "response received but unavailable"
need different patience:

1. BoundedRetryScheduler: up to N attempts with capped exponential backoff,
   consulting the classifier after every failed attempt.
2. NetworkRetryScheduler: re-runs the bounded flow at a fixed interval while
   no response can be obtained at all, once or until the network comes back.

Schedulers never raise for attempt outcomes; they return a RetryResult.
"""

from dataclasses import replace

import structlog

from resilient_fetch.cancellation import abortable_sleep
from resilient_fetch.exceptions import AbortError
from resilient_fetch.models.enums import OutcomeKind
from resilient_fetch.models.outcome import Outcome
from resilient_fetch.models.request import RequestDescriptor
from resilient_fetch.monitoring.metrics import fetch_retries_total
from resilient_fetch.retry.classifier import classify
from resilient_fetch.retry.metadata import AttemptContext, RetryResult
from resilient_fetch.transport.base import BaseTransport

logger = structlog.get_logger(__name__)


class BoundedRetryScheduler:
    """
    Bounded retry with exponential backoff.

    Attempts are strictly sequential. A non-retryable verdict stops the run
    at once instead of burning the remaining attempts, and cancellation
    stops it regardless of budget or verdict.
    """

    name = "bounded"

    def __init__(
        self,
        transport: BaseTransport,
        max_attempts: int = 5,
        base_delay_ms: int = 200,
        max_delay_ms: int = 5000,
        backoff_factor: float = 2.0,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.transport = transport
        self.max_attempts = max_attempts
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms
        self.backoff_factor = backoff_factor

    async def run(self, url: str, descriptor: RequestDescriptor) -> RetryResult:
        context = AttemptContext(
            max_attempts=self.max_attempts,
            base_delay_ms=self.base_delay_ms,
            max_delay_ms=self.max_delay_ms,
            backoff_factor=self.backoff_factor,
        )
        signal = descriptor.cancel_signal

        while True:
            if signal is not None and signal.cancelled:
                context.aborted_early = True
                error = AbortError(signal.reason or "Request cancelled", details={"reason": signal.reason})
                return RetryResult(Outcome.aborted(error), attempts=context.attempt_number - 1)

            outcome = await self.transport.attempt(url, descriptor)

            if outcome.kind is OutcomeKind.SUCCESS:
                return RetryResult(outcome, attempts=context.attempt_number)

            if outcome.kind is OutcomeKind.ABORTED:
                context.aborted_early = True
                return RetryResult(outcome, attempts=context.attempt_number)

            if not classify(outcome, descriptor):
                logger.info(
                    "Attempt failed and is not retryable",
                    attempt=context.attempt_number,
                    url=url,
                    outcome=outcome.kind.value,
                    status=outcome.status,
                )
                return RetryResult(outcome, attempts=context.attempt_number)

            if not context.has_remaining:
                logger.warning(
                    "Retry attempts exhausted",
                    attempts=context.attempt_number,
                    url=url,
                    outcome=outcome.kind.value,
                    status=outcome.status,
                )
                return RetryResult(outcome, attempts=context.attempt_number, exhausted=True)

            logger.warning(
                "Attempt failed. It will be retried",
                attempt=context.attempt_number + 1,
                max_attempts=context.max_attempts,
                url=url,
                status=outcome.status,
                error=repr(outcome.error) if outcome.error else None,
                delay_ms=context.current_delay_ms,
            )
            fetch_retries_total.labels(scheduler=self.name).inc()

            try:
                await abortable_sleep(context.current_delay_ms / 1000, signal)
            except AbortError as e:
                context.aborted_early = True
                return RetryResult(Outcome.aborted(e), attempts=context.attempt_number)

            context.advance()


class NetworkRetryScheduler:
    """
    Retry for pure network failures (offline, DNS failure, connection reset).

    The first cycle re-runs the whole bounded flow immediately; later cycles
    wait the fixed interval first. With offline_retry=False exactly one cycle is made; with True cycles
    continue until any response (of any status) is obtained or the call is
    cancelled.
    """

    name = "network"

    def __init__(
        self,
        bounded: BoundedRetryScheduler,
        interval_ms: int = 2000,
        offline_retry: bool = True,
    ):
        self.bounded = bounded
        self.interval_ms = interval_ms
        self.offline_retry = offline_retry

    async def run(self, url: str, descriptor: RequestDescriptor) -> RetryResult:
        signal = descriptor.cancel_signal
        cycle = 0

        while True:
            try:
                if cycle:
                    await abortable_sleep(self.interval_ms / 1000, signal)
                elif signal is not None:
                    signal.raise_if_cancelled()
            except AbortError as e:
                return RetryResult(Outcome.aborted(e), attempts=0, network_cycles=cycle)

            cycle += 1
            fetch_retries_total.labels(scheduler=self.name).inc()
            result = replace(await self.bounded.run(url, descriptor), network_cycles=cycle)

            if not result.outcome.is_network_failure:
                if cycle > 1:
                    logger.info("Network recovered", url=url, cycles=cycle, outcome=result.outcome.kind.value)
                return result

            if not self.offline_retry:
                logger.warning(
                    "Network failure persists, giving up",
                    url=url,
                    cycles=cycle,
                    error=repr(result.outcome.error),
                )
                return result

            logger.warning(
                "Network failure, waiting for connectivity",
                url=url,
                cycle=cycle,
                interval_ms=self.interval_ms,
                error=repr(result.outcome.error),
            )
