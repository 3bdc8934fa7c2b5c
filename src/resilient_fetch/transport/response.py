"""
Transport-neutral response shape.

Both transports return FetchResponse so callers cannot tell which one
served the call. The body is fully read by the transport; decoding into
text or JSON is deferred until the accessor is called.
"""

import json
from typing import Any

import httpx

from resilient_fetch.exceptions import DecodeError


class FetchResponse:
    """
    Response of one successful HTTP exchange.

    Attributes:
        status: HTTP status code
        status_text: Reason phrase (e.g. "Service Unavailable")
        headers: Ordered, case-insensitive response headers
        url: Final URL after redirects
    """

    def __init__(
        self,
        status: int,
        status_text: str = "",
        headers: httpx.Headers | dict[str, str] | None = None,
        content: bytes = b"",
        url: str = "",
        encoding: str | None = None,
    ):
        self.status = status
        self.status_text = status_text
        self.headers = httpx.Headers(headers or {})
        self.url = url
        self._content = content
        self._encoding = encoding

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "FetchResponse":
        """Build from an httpx response whose body has already been read."""
        return cls(
            status=response.status_code,
            status_text=response.reason_phrase,
            headers=response.headers,
            content=response.content,
            url=str(response.url),
            encoding=response.encoding,
        )

    @property
    def ok(self) -> bool:
        return 200 <= self.status <= 299

    @property
    def content(self) -> bytes:
        return self._content

    def text(self) -> str:
        return self._content.decode(self._encoding or "utf-8", errors="replace")

    def json(self) -> Any:
        """
        Decode the body as JSON.

        Raises:
            DecodeError: If the body is not valid JSON or not valid in its
                encoding. Retry state is unaffected; the HTTP exchange
                itself succeeded.
        """
        try:
            return json.loads(self._content.decode(self._encoding or "utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DecodeError(
                "Response body is not valid JSON",
                details={"status": self.status, "url": self.url, "parse_error": str(e)},
            ) from e

    def __repr__(self) -> str:
        return f"FetchResponse(status={self.status}, url={self.url})"
