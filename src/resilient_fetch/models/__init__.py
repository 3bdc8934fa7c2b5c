"""
Data models for orchestrated fetches.

- enums: OutcomeKind, RequestClass, TransportKind
- request: FetchOptions (caller input), RequestDescriptor (immutable per call), MultipartForm
- progress: ProgressEvent, SpeedSample
- outcome: Outcome (tagged single-attempt result)
"""

from resilient_fetch.models.enums import OutcomeKind, RequestClass, TransportKind
from resilient_fetch.models.outcome import Outcome
from resilient_fetch.models.progress import ProgressEvent, SpeedSample
from resilient_fetch.models.request import (
    FetchOptions,
    MultipartForm,
    ProgressSink,
    RequestDescriptor,
)

__all__ = [
    "FetchOptions",
    "MultipartForm",
    "Outcome",
    "OutcomeKind",
    "ProgressEvent",
    "ProgressSink",
    "RequestClass",
    "RequestDescriptor",
    "SpeedSample",
    "TransportKind",
]
