"""
Pooled async Redis client for the shared request ledger.

One connection pool per process, built from REDIS_URL / REDIS_MAX_CONNECTIONS
on first use. Every RedisRequestTracker created through
RedisRequestTracker.from_settings() borrows connections from it.
"""

from typing import Optional

import structlog
from redis.asyncio import ConnectionPool as AsyncConnectionPool
from redis.asyncio import Redis as AsyncRedis

from resilient_fetch.config import Settings

logger = structlog.get_logger(__name__)

# Ledger writes sit on the request path; fail fast instead of stalling a fetch
LEDGER_SOCKET_TIMEOUT = 5


class RedisClient:
    """Process-wide async connection pool for ledger clients."""

    _async_pool: Optional[AsyncConnectionPool] = None

    @classmethod
    def get_async_client(cls, settings: Settings) -> AsyncRedis:
        """
        Get an async client bound to the shared pool.

        Responses are decoded to str so ledger hashes read back as
        {request_id: start_ms} without byte handling.
        """
        if cls._async_pool is None:
            cls._async_pool = AsyncConnectionPool.from_url(
                settings.REDIS_URL,
                max_connections=settings.REDIS_MAX_CONNECTIONS,
                decode_responses=True,
                socket_timeout=LEDGER_SOCKET_TIMEOUT,
                socket_connect_timeout=LEDGER_SOCKET_TIMEOUT,
                retry_on_timeout=True,
            )
            logger.info("Initialized ledger connection pool", max_connections=settings.REDIS_MAX_CONNECTIONS)

        return AsyncRedis(connection_pool=cls._async_pool)

    @classmethod
    async def close_async_pool(cls) -> None:
        """Disconnect the shared pool; the next get_async_client() builds a new one."""
        if cls._async_pool is None:
            return
        await cls._async_pool.disconnect()
        cls._async_pool = None
        logger.info("Closed ledger connection pool")
