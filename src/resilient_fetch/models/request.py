"""
Request descriptor models.

FetchOptions is what callers hand to RequestOrchestrator.fetch(); the
orchestrator turns it into an immutable RequestDescriptor (shallow-copying
headers) so later caller-side mutation cannot leak into in-flight attempts.
"""

from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from resilient_fetch.cancellation import CancelSignal
from resilient_fetch.models.enums import RequestClass
from resilient_fetch.models.progress import ProgressEvent

ProgressSink = Callable[[ProgressEvent], None]


class MultipartForm(BaseModel):
    """
    Multipart form payload (text fields plus file parts).

    `files` values follow httpx conventions: raw bytes, or a
    (filename, content[, content_type]) tuple.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    fields: dict[str, str] = Field(default_factory=dict, description="Plain text form fields")
    files: dict[str, Any] = Field(default_factory=dict, description="File parts keyed by field name")


class FetchOptions(BaseModel):
    """Per-call options accepted by RequestOrchestrator.fetch()."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    method: str = Field(default="GET", description="HTTP method")
    headers: dict[str, str] = Field(default_factory=dict, description="Request headers")
    body: Any = Field(
        default=None,
        description="str (text), dict/list (JSON), bytes or MultipartForm (binary-form)"
    )
    retryable: Optional[bool] = Field(
        default=None,
        description="Explicit retry override; wins over every status rule"
    )
    read: Optional[bool] = Field(default=None, description="Force 'read' tracking class")
    cancel_signal: Optional[CancelSignal] = Field(default=None, description="Cancellation handle")
    on_upload_progress: Optional[ProgressSink] = Field(
        default=None,
        description="Upload progress sink (binary-form bodies only)"
    )


class RequestDescriptor(BaseModel):
    """
    Immutable, transport-neutral description of one orchestrated call.

    Shared by every attempt of the call; transports never mutate it.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    url: str
    method: str = "GET"
    headers: dict[str, str] = Field(default_factory=dict)
    body: Any = None
    retryable: Optional[bool] = None
    read: Optional[bool] = None
    cancel_signal: Optional[CancelSignal] = None
    on_upload_progress: Optional[ProgressSink] = None

    @field_validator("method")
    @classmethod
    def normalize_method(cls, v: str) -> str:
        return v.upper()

    @classmethod
    def from_options(cls, url: str, options: FetchOptions | None = None) -> "RequestDescriptor":
        options = options or FetchOptions()
        return cls(
            url=url,
            method=options.method,
            headers=dict(options.headers),
            body=options.body,
            retryable=options.retryable,
            read=options.read,
            cancel_signal=options.cancel_signal,
            on_upload_progress=options.on_upload_progress,
        )

    @property
    def request_class(self) -> RequestClass:
        if self.read or self.method == "GET":
            return RequestClass.READ
        return RequestClass.WRITE

    @property
    def is_binary_form(self) -> bool:
        return isinstance(self.body, (MultipartForm, bytes, bytearray, memoryview))
