"""
Cooperative cancellation primitives.

A CancelSignal is handed to a fetch call by the caller. Once triggered it
interrupts pending backoff waits immediately and races in-flight transport
attempts, which then resolve as aborted. Timeouts are composed by the caller
through cancel_after().
"""

import asyncio
from typing import Any, Awaitable, TypeVar

import structlog

from resilient_fetch.exceptions import AbortError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class CancelSignal:
    """One-shot cancellation handle shared between a caller and a fetch call."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self.reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str = "Request cancelled") -> None:
        """Trigger cancellation. Subsequent calls keep the first reason."""
        if self._event.is_set():
            return
        self.reason = reason
        self._event.set()
        logger.debug("Cancel signal triggered", reason=reason)

    def cancel_after(self, seconds: float) -> asyncio.TimerHandle:
        """Schedule cancel() on the running loop, e.g. to enforce a deadline."""
        loop = asyncio.get_running_loop()
        return loop.call_later(seconds, self.cancel, f"Timed out after {seconds}s")

    async def wait(self) -> None:
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise AbortError(self.reason or "Request cancelled", details={"reason": self.reason})

    def __repr__(self) -> str:
        return f"CancelSignal(cancelled={self.cancelled})"


async def abortable_sleep(seconds: float, signal: CancelSignal | None = None) -> None:
    """
    Sleep for `seconds` unless the signal fires first.

    Raises:
        AbortError: If the signal is (or becomes) cancelled
    """
    if signal is None:
        await asyncio.sleep(seconds)
        return

    signal.raise_if_cancelled()
    try:
        await asyncio.wait_for(signal.wait(), timeout=seconds)
    except asyncio.TimeoutError:
        return
    signal.raise_if_cancelled()


async def run_until_cancelled(aw: Awaitable[T], signal: CancelSignal | None = None) -> T:
    """
    Await `aw`, abandoning it as soon as the signal fires.

    The abandoned work is cancelled and awaited so no orphan task keeps
    producing side effects (progress events) after the call has aborted.

    Raises:
        AbortError: If the signal fires before `aw` completes
    """
    if signal is None:
        return await aw

    signal.raise_if_cancelled()
    work: asyncio.Future[Any] = asyncio.ensure_future(aw)
    watcher = asyncio.ensure_future(signal.wait())
    try:
        await asyncio.wait({work, watcher}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        work.cancel()
        raise
    finally:
        watcher.cancel()

    if not work.done():
        work.cancel()
        try:
            await work
        except asyncio.CancelledError:
            pass
        signal.raise_if_cancelled()

    return work.result()
