"""
Request tracker collaborator interface.

The orchestrator reports the start and end of every call to an optional
tracker; the tracker keeps a ledger of in-flight request ids per class.
An id present in the ledger denotes a live, not yet concluded request.
"""

import time
from typing import Awaitable, Mapping, Protocol, Union, runtime_checkable

PendingLedger = Mapping[str, int]


@runtime_checkable
class RequestTracker(Protocol):
    """
    Ledger of in-flight requests keyed by generated request id.

    Methods may be plain or async; the orchestrator awaits whatever is
    awaitable. request_class is "read" or "write".
    """

    def record_start(self, request_id: str, request_class: str) -> Union[None, Awaitable[None]]:
        ...

    def record_end(self, request_id: str, request_class: str) -> Union[None, Awaitable[None]]:
        ...

    def pending_reads(self) -> Union[PendingLedger, Awaitable[PendingLedger]]:
        ...

    def pending_writes(self) -> Union[PendingLedger, Awaitable[PendingLedger]]:
        ...


def now_ms() -> int:
    """Wall-clock start timestamp stored in the ledger (epoch milliseconds)."""
    return int(time.time() * 1000)


def validate_request_class(request_class: str) -> str:
    value = str(getattr(request_class, "value", request_class))
    if value not in ("read", "write"):
        raise ValueError(f"request_class must be 'read' or 'write', got {request_class!r}")
    return value
