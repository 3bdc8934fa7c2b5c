"""
In-process request ledger.
"""

import structlog

from resilient_fetch.tracking.base import now_ms, validate_request_class

logger = structlog.get_logger(__name__)


class InMemoryRequestTracker:
    """
    Dict-backed ledger of pending reads and writes.

    Safe for many concurrent calls on one event loop: every call owns a
    distinct generated id, so inserts and removals never touch each
    other's entries.
    """

    def __init__(self) -> None:
        self._pending: dict[str, dict[str, int]] = {"read": {}, "write": {}}

    def record_start(self, request_id: str, request_class: str) -> None:
        bucket = validate_request_class(request_class)
        self._pending[bucket][request_id] = now_ms()
        logger.debug("Request started", request_id=request_id, request_class=bucket)

    def record_end(self, request_id: str, request_class: str) -> None:
        bucket = validate_request_class(request_class)
        started_at = self._pending[bucket].pop(request_id, None)
        logger.debug(
            "Request concluded",
            request_id=request_id,
            request_class=bucket,
            was_pending=started_at is not None,
        )

    def pending_reads(self) -> dict[str, int]:
        return dict(self._pending["read"])

    def pending_writes(self) -> dict[str, int]:
        return dict(self._pending["write"])

    def __repr__(self) -> str:
        return (
            f"InMemoryRequestTracker(reads={len(self._pending['read'])}, "
            f"writes={len(self._pending['write'])})"
        )
