"""
Progress-capable transport.

Encodes the binary-form body up front, then streams it to the server in
fixed-size chunks, emitting a ProgressEvent after each chunk is handed to
the connection. Events are attempt-scoped: a retried upload starts again
from sent_bytes=0 with a fresh speed estimator.
"""

import time
from typing import AsyncIterator

import httpx
import structlog

from resilient_fetch.exceptions import AbortError
from resilient_fetch.models.enums import TransportKind
from resilient_fetch.models.progress import ProgressEvent
from resilient_fetch.models.request import RequestDescriptor
from resilient_fetch.monitoring.metrics import fetch_upload_bytes_total
from resilient_fetch.transport.base import BaseTransport
from resilient_fetch.transport.speed import DEFAULT_WINDOW_SIZE, SpeedEstimator

logger = structlog.get_logger(__name__)

DEFAULT_CHUNK_SIZE = 65536


def _now_ms() -> int:
    return int(time.monotonic() * 1000)


class ProgressTransport(BaseTransport):
    """
    Transport for binary-form uploads with an upload-progress sink.

    Produces the same FetchResponse as PlainTransport once the exchange
    completes; every progress event is emitted strictly before that.
    """

    kind = TransportKind.PROGRESS

    def __init__(
        self,
        client: httpx.AsyncClient,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        window_size: int = DEFAULT_WINDOW_SIZE,
    ):
        super().__init__(client)
        if chunk_size < 1:
            raise ValueError("chunk_size must be >= 1")
        self.chunk_size = chunk_size
        self.window_size = window_size

    def build_request(self, url: str, descriptor: RequestDescriptor) -> httpx.Request:
        # Let httpx encode the payload (multipart boundary, Content-Length),
        # then swap the body for an instrumented stream of the same bytes.
        encoded = self._client.build_request(
            descriptor.method,
            url,
            headers=self.wire_headers(descriptor),
            **self.body_kwargs(descriptor.body),
        )
        payload = encoded.read()

        return httpx.Request(
            descriptor.method,
            encoded.url,
            headers=encoded.headers,
            content=self._stream(payload, descriptor),
            extensions=encoded.extensions,
        )

    async def _stream(self, payload: bytes, descriptor: RequestDescriptor) -> AsyncIterator[bytes]:
        total = len(payload)
        estimator = SpeedEstimator(self.window_size)
        estimator.record(0, _now_ms())
        sink = descriptor.on_upload_progress
        signal = descriptor.cancel_signal
        sent = 0

        for offset in range(0, total, self.chunk_size):
            if signal is not None and signal.cancelled:
                raise AbortError(signal.reason or "Request cancelled", details={"sent_bytes": sent})

            chunk = payload[offset:offset + self.chunk_size]
            yield chunk
            sent += len(chunk)
            fetch_upload_bytes_total.inc(len(chunk))

            if signal is not None and signal.cancelled:
                # No progress reporting once the call is aborting
                continue

            event = ProgressEvent(
                sent_bytes=sent,
                total_bytes=total,
                percentage=sent / total,
                speed_bytes_per_sec=estimator.record(sent, _now_ms()),
            )
            if sink is not None:
                sink(event)

        logger.debug("Upload body fully transmitted", total_bytes=total)
