"""Monitoring and metrics instrumentation for orchestrated fetches."""

from resilient_fetch.monitoring.metrics import (
    fetch_attempts_total,
    fetch_request_duration_seconds,
    fetch_requests_total,
    fetch_retries_total,
    fetch_upload_bytes_total,
)

__all__ = [
    "fetch_attempts_total",
    "fetch_retries_total",
    "fetch_requests_total",
    "fetch_request_duration_seconds",
    "fetch_upload_bytes_total",
]
