"""
Transport abstraction and implementations.

Components:
- BaseTransport: Single-attempt capability returning an Outcome
- PlainTransport: Uninstrumented request/response exchange
- ProgressTransport: Chunked upload emitting ProgressEvents
- SpeedEstimator: Moving-window upload throughput
- FetchResponse: Response shape shared by both transports
- selection: Picks the transport once per call
"""

from resilient_fetch.transport.base import BaseTransport
from resilient_fetch.transport.plain import PlainTransport
from resilient_fetch.transport.progress import ProgressTransport
from resilient_fetch.transport.response import FetchResponse
from resilient_fetch.transport.selection import (
    build_transport,
    select_transport,
    select_transport_kind,
)
from resilient_fetch.transport.speed import SpeedEstimator

__all__ = [
    "BaseTransport",
    "FetchResponse",
    "PlainTransport",
    "ProgressTransport",
    "SpeedEstimator",
    "build_transport",
    "select_transport",
    "select_transport_kind",
]
