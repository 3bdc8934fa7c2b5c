"""
Unit tests for InMemoryRequestTracker.
"""

import pytest

from resilient_fetch.tracking.base import RequestTracker
from resilient_fetch.tracking.memory import InMemoryRequestTracker


def test_write_is_pending_until_recorded_end():
    tracker = InMemoryRequestTracker()

    tracker.record_start("req-1", "write")
    assert "req-1" in tracker.pending_writes()
    assert tracker.pending_reads() == {}

    tracker.record_end("req-1", "write")
    assert "req-1" not in tracker.pending_writes()


def test_read_ledger_stores_start_timestamp():
    tracker = InMemoryRequestTracker()

    tracker.record_start("req-2", "read")

    started_at = tracker.pending_reads()["req-2"]
    assert isinstance(started_at, int)
    assert started_at > 0


def test_ending_unknown_request_is_harmless():
    tracker = InMemoryRequestTracker()
    tracker.record_start("req-3", "read")

    tracker.record_end("never-started", "read")

    assert list(tracker.pending_reads()) == ["req-3"]


def test_unrelated_entries_are_untouched():
    tracker = InMemoryRequestTracker()
    for request_id in ("a", "b", "c"):
        tracker.record_start(request_id, "write")

    tracker.record_end("b", "write")

    assert sorted(tracker.pending_writes()) == ["a", "c"]


def test_queries_return_snapshots():
    tracker = InMemoryRequestTracker()
    tracker.record_start("req-4", "write")

    snapshot = tracker.pending_writes()
    snapshot.clear()

    assert "req-4" in tracker.pending_writes()


def test_invalid_request_class_rejected():
    tracker = InMemoryRequestTracker()

    with pytest.raises(ValueError, match="read"):
        tracker.record_start("req-5", "delete")


def test_satisfies_tracker_protocol():
    assert isinstance(InMemoryRequestTracker(), RequestTracker)
