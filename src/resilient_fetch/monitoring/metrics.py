"""Custom Prometheus metrics for orchestrated fetches.

Exposed through whatever registry/exporter the host application scrapes.
Alert rules worth configuring:
- fetch_retries_total (high retry rate indicates an unstable upstream)
- fetch_requests_total{result="network_error"} (clients stuck offline)
"""

from prometheus_client import Counter, Histogram

# === Attempt Metrics ===

fetch_attempts_total = Counter(
    "fetch_attempts_total",
    "Total transport attempts by transport and outcome",
    ["transport", "outcome"],
)
"""
Single-attempt counter.

Labels:
- transport: plain, progress
- outcome: success, server_failure, network_failure, request_failure, aborted
"""

fetch_retries_total = Counter(
    "fetch_retries_total",
    "Total retries scheduled by scheduler",
    ["scheduler"],
)
"""
Retries scheduled (not attempts made).

Labels:
- scheduler: bounded (backoff on retryable responses), network (offline retry cycles)
"""

# === Call Metrics ===

fetch_requests_total = Counter(
    "fetch_requests_total",
    "Total orchestrated calls by request class and terminal result",
    ["request_class", "result"],
)
"""
Terminal result per orchestrated call.

Labels:
- request_class: read, write
- result: success, client_failure, server_failure, retry_exhausted,
  network_error, request_failed, aborted
"""

fetch_request_duration_seconds = Histogram(
    "fetch_request_duration_seconds",
    "Orchestrated call duration in seconds, retries and waits included",
    ["request_class"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0],
)

# === Upload Metrics ===

fetch_upload_bytes_total = Counter(
    "fetch_upload_bytes_total",
    "Total request body bytes streamed by the progress transport",
)
