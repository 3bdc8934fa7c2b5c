"""
Attempt outcome model.

An Outcome is produced by one transport attempt and consumed immediately
by the classifier and the schedulers. It is never persisted.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from resilient_fetch.models.enums import OutcomeKind

if TYPE_CHECKING:
    from resilient_fetch.transport.response import FetchResponse


@dataclass(frozen=True)
class Outcome:
    """
    Tagged result of a single attempt.

    Attributes:
        kind: Which variant this is
        response: Set for SUCCESS and SERVER_FAILURE
        error: Set for NETWORK_FAILURE, REQUEST_FAILURE and ABORTED
    """

    kind: OutcomeKind
    response: "FetchResponse | None" = None
    error: BaseException | None = None

    def __post_init__(self) -> None:
        """Validate variant invariants."""
        carries_response = self.kind in (OutcomeKind.SUCCESS, OutcomeKind.SERVER_FAILURE)
        if carries_response and self.response is None:
            raise ValueError(f"{self.kind.value} outcome requires a response")
        if not carries_response and self.error is None:
            raise ValueError(f"{self.kind.value} outcome requires an error")

    @classmethod
    def success(cls, response: "FetchResponse") -> "Outcome":
        return cls(OutcomeKind.SUCCESS, response=response)

    @classmethod
    def server_failure(cls, response: "FetchResponse") -> "Outcome":
        return cls(OutcomeKind.SERVER_FAILURE, response=response)

    @classmethod
    def network_failure(cls, error: BaseException) -> "Outcome":
        return cls(OutcomeKind.NETWORK_FAILURE, error=error)

    @classmethod
    def request_failure(cls, error: BaseException) -> "Outcome":
        return cls(OutcomeKind.REQUEST_FAILURE, error=error)

    @classmethod
    def aborted(cls, error: BaseException) -> "Outcome":
        return cls(OutcomeKind.ABORTED, error=error)

    @property
    def status(self) -> int | None:
        """HTTP status, or None when no response was received."""
        return self.response.status if self.response is not None else None

    @property
    def is_network_failure(self) -> bool:
        return self.kind is OutcomeKind.NETWORK_FAILURE
