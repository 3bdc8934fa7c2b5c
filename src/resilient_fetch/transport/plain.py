"""
Plain transport: one request/response exchange, no instrumentation.
"""

import httpx

from resilient_fetch.models.enums import TransportKind
from resilient_fetch.models.request import RequestDescriptor
from resilient_fetch.transport.base import BaseTransport


class PlainTransport(BaseTransport):
    """Default transport used whenever upload progress is not requested."""

    kind = TransportKind.PLAIN

    def build_request(self, url: str, descriptor: RequestDescriptor) -> httpx.Request:
        return self._client.build_request(
            descriptor.method,
            url,
            headers=self.wire_headers(descriptor),
            **self.body_kwargs(descriptor.body),
        )
