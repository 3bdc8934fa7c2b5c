"""
Transport selection.

Selection is a pure function of the descriptor's shape and is decided once
per orchestrated call; retries reuse the chosen transport.
"""

import httpx

from resilient_fetch.config import Settings
from resilient_fetch.models.enums import TransportKind
from resilient_fetch.models.request import RequestDescriptor
from resilient_fetch.transport.base import BaseTransport
from resilient_fetch.transport.plain import PlainTransport
from resilient_fetch.transport.progress import ProgressTransport


def select_transport_kind(descriptor: RequestDescriptor) -> TransportKind:
    """PROGRESS only for binary-form bodies that come with a progress sink."""
    if descriptor.is_binary_form and descriptor.on_upload_progress is not None:
        return TransportKind.PROGRESS
    return TransportKind.PLAIN


def build_transport(
    kind: TransportKind, client: httpx.AsyncClient, settings: Settings
) -> BaseTransport:
    if kind is TransportKind.PROGRESS:
        return ProgressTransport(
            client,
            chunk_size=settings.UPLOAD_CHUNK_SIZE,
            window_size=settings.SPEED_WINDOW_SIZE,
        )
    return PlainTransport(client)


def select_transport(
    descriptor: RequestDescriptor, client: httpx.AsyncClient, settings: Settings
) -> BaseTransport:
    return build_transport(select_transport_kind(descriptor), client, settings)
