"""
Redis persistence layer.

- redis_client.py: pooled async Redis client behind RedisRequestTracker.from_settings()
"""

from resilient_fetch.persistence.redis_client import RedisClient

__all__ = [
    "RedisClient",
]
