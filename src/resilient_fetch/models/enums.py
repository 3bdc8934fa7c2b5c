"""
Enumerations for fetch orchestration data models.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class OutcomeKind(str, Enum):
    """
    Result of exactly one transport attempt.

    NETWORK_FAILURE and REQUEST_FAILURE both carry no HTTP status; only the
    former is treated as "offline" and handed to the network-failure scheduler.
    """

    SUCCESS = "success"
    SERVER_FAILURE = "server_failure"
    NETWORK_FAILURE = "network_failure"
    REQUEST_FAILURE = "request_failure"
    ABORTED = "aborted"


class RequestClass(str, Enum):
    """Ledger bucket for a tracked request."""

    READ = "read"
    WRITE = "write"


class TransportKind(str, Enum):
    """Transport variant chosen once per orchestrated call."""

    PLAIN = "plain"
    PROGRESS = "progress"
