"""
Request tracking ledgers.

- RequestTracker: protocol consumed by the orchestrator
- InMemoryRequestTracker: single-process dict ledger
- RedisRequestTracker: shared ledger in Redis hashes
"""

from resilient_fetch.tracking.base import RequestTracker
from resilient_fetch.tracking.memory import InMemoryRequestTracker
from resilient_fetch.tracking.redis_tracker import RedisRequestTracker

__all__ = [
    "InMemoryRequestTracker",
    "RedisRequestTracker",
    "RequestTracker",
]
