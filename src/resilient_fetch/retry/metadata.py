"""
Retry bookkeeping.

AttemptContext is the mutable per-run state of the bounded scheduler;
RetryResult is the immutable value a scheduler run returns.
"""

from dataclasses import dataclass, field

from resilient_fetch.models.outcome import Outcome


@dataclass
class AttemptContext:
    """
    State of one bounded scheduler run. Created fresh per run.

    Attributes:
        max_attempts: Attempt budget (>= 1)
        base_delay_ms: First backoff wait
        max_delay_ms: Backoff cap
        backoff_factor: Growth of the wait per attempt
        attempt_number: Current attempt (1-indexed)
        current_delay_ms: Wait applied after the current attempt fails
        aborted_early: True once the run stopped because of cancellation
    """

    max_attempts: int
    base_delay_ms: int
    max_delay_ms: int = 5000
    backoff_factor: float = 2.0
    attempt_number: int = 1
    current_delay_ms: float = field(init=False, default=0.0)
    aborted_early: bool = False

    def __post_init__(self) -> None:
        """Validate context invariants."""
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.base_delay_ms < 0:
            raise ValueError("base_delay_ms must be >= 0")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be >= 1")
        self.current_delay_ms = min(self.base_delay_ms, self.max_delay_ms)

    @property
    def has_remaining(self) -> bool:
        return self.attempt_number < self.max_attempts

    def advance(self) -> None:
        """Move to the next attempt and grow the backoff."""
        self.attempt_number += 1
        self.current_delay_ms = min(self.current_delay_ms * self.backoff_factor, self.max_delay_ms)


@dataclass(frozen=True)
class RetryResult:
    """
    Final outcome of a scheduler run.

    Attributes:
        outcome: Outcome of the last attempt (or the abort that ended the run)
        attempts: Transport attempts made by the last bounded run
        exhausted: True when the classifier still wanted a retry but the
            attempt budget was consumed
        network_cycles: Bounded runs started by the network-failure scheduler
    """

    outcome: Outcome
    attempts: int
    exhausted: bool = False
    network_cycles: int = 0

    def __post_init__(self) -> None:
        if self.attempts < 0:
            raise ValueError("attempts must be >= 0")
