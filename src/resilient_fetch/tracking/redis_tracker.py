"""
Redis-backed request ledger.

Storage Strategy:
- Pending reads: Hash "{prefix}:pending_reads", field = request id, value = start ms
- Pending writes: Hash "{prefix}:pending_writes", same layout
- Concluded requests are removed with HDEL, so the hashes only ever hold live ids

Sharing the hashes lets several processes observe each other's in-flight
requests (e.g. to warn before shutdown while writes are pending).
"""

import structlog
from redis.asyncio import Redis as AsyncRedis

from resilient_fetch.config import Settings
from resilient_fetch.persistence.redis_client import RedisClient
from resilient_fetch.tracking.base import now_ms, validate_request_class

logger = structlog.get_logger(__name__)


class RedisRequestTracker:
    """Async ledger of pending requests stored in two Redis hashes."""

    def __init__(self, redis_client: AsyncRedis, settings: Settings):
        """
        Initialize tracker.

        Args:
            redis_client: AsyncRedis client instance (decode_responses=True)
            settings: Application settings (for TRACKER_KEY_PREFIX)
        """
        self.redis = redis_client
        self.key_prefix = settings.TRACKER_KEY_PREFIX

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisRequestTracker":
        """Build a tracker on the shared connection pool (REDIS_URL, REDIS_MAX_CONNECTIONS)."""
        return cls(RedisClient.get_async_client(settings), settings)

    async def close(self) -> None:
        """Release this tracker's client; the shared pool stays open for other trackers."""
        await self.redis.aclose()

    def _key(self, request_class: str) -> str:
        bucket = validate_request_class(request_class)
        return f"{self.key_prefix}:pending_{bucket}s"

    async def record_start(self, request_id: str, request_class: str) -> None:
        key = self._key(request_class)
        await self.redis.hset(key, request_id, now_ms())
        logger.debug("Request started", request_id=request_id, key=key)

    async def record_end(self, request_id: str, request_class: str) -> None:
        key = self._key(request_class)
        removed = await self.redis.hdel(key, request_id)
        logger.debug("Request concluded", request_id=request_id, key=key, was_pending=bool(removed))

    async def pending_reads(self) -> dict[str, int]:
        return await self._pending("read")

    async def pending_writes(self) -> dict[str, int]:
        return await self._pending("write")

    async def _pending(self, request_class: str) -> dict[str, int]:
        raw = await self.redis.hgetall(self._key(request_class))
        return {request_id: int(started_at) for request_id, started_at in raw.items()}
