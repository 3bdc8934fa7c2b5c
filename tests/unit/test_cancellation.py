"""
Unit tests for CancelSignal and the cancellation helpers.
"""

import asyncio
import time

import pytest

from resilient_fetch.cancellation import CancelSignal, abortable_sleep, run_until_cancelled
from resilient_fetch.exceptions import AbortError


def test_cancel_keeps_first_reason():
    signal = CancelSignal()

    signal.cancel("first")
    signal.cancel("second")

    assert signal.cancelled is True
    assert signal.reason == "first"


def test_raise_if_cancelled():
    signal = CancelSignal()
    signal.raise_if_cancelled()

    signal.cancel("stop")

    with pytest.raises(AbortError, match="stop"):
        signal.raise_if_cancelled()


@pytest.mark.asyncio
async def test_abortable_sleep_completes_without_cancel():
    await abortable_sleep(0.001, CancelSignal())
    await abortable_sleep(0.001, None)


@pytest.mark.asyncio
async def test_abortable_sleep_is_interrupted():
    signal = CancelSignal()
    asyncio.get_running_loop().call_later(0.01, signal.cancel)
    started = time.monotonic()

    with pytest.raises(AbortError):
        await abortable_sleep(10, signal)

    assert time.monotonic() - started < 2


@pytest.mark.asyncio
async def test_abortable_sleep_rejects_already_cancelled_signal():
    signal = CancelSignal()
    signal.cancel()

    with pytest.raises(AbortError):
        await abortable_sleep(0, signal)


@pytest.mark.asyncio
async def test_cancel_after_composes_a_timeout():
    signal = CancelSignal()
    signal.cancel_after(0.01)

    with pytest.raises(AbortError, match="Timed out"):
        await abortable_sleep(10, signal)


@pytest.mark.asyncio
async def test_run_until_cancelled_returns_result():
    async def work():
        return 42

    assert await run_until_cancelled(work(), CancelSignal()) == 42
    assert await run_until_cancelled(work(), None) == 42


@pytest.mark.asyncio
async def test_run_until_cancelled_stops_abandoned_work():
    finished = []

    async def slow_work():
        await asyncio.sleep(10)
        finished.append(True)

    signal = CancelSignal()
    asyncio.get_running_loop().call_later(0.01, signal.cancel)

    with pytest.raises(AbortError):
        await run_until_cancelled(slow_work(), signal)

    await asyncio.sleep(0.02)
    assert finished == []


@pytest.mark.asyncio
async def test_run_until_cancelled_propagates_work_errors():
    async def failing():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        await run_until_cancelled(failing(), CancelSignal())
