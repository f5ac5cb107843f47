"""
Redis-backed key-value store.

Uses the asyncio Redis client with decoded responses so keys and
values round-trip as str. Redis errors are wrapped in
StoreUnavailableError and never retried here.
"""

from typing import Any

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from postkv.core.config import settings
from postkv.core.exceptions import StoreUnavailableError
from postkv.core.logging import get_logger
from postkv.storage.base import KeyValueStore

logger = get_logger(__name__)


class RedisStore(KeyValueStore):
    """
    Key-value store on top of a Redis server.

    Each get/put is a single round-trip (GET/SET) so per-key atomicity
    comes from Redis itself.
    """

    backend = "redis"

    def __init__(self, client: aioredis.Redis | None = None, url: str | None = None) -> None:
        """
        Initialize Redis store.

        Args:
            client: Pre-built Redis client (tests, shared pools)
            url: Redis URL, defaults to settings.REDIS_URL
        """
        self.url = url or settings.REDIS_URL
        self.client = client or aioredis.from_url(
            self.url,
            decode_responses=True,
            socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        )

    async def get(self, key: str) -> str | None:
        try:
            return await self.client.get(key)
        except RedisError as e:
            logger.error(f"Redis get failed for {key}: {e}")
            raise StoreUnavailableError(str(e), {"operation": "get", "key": key}) from e

    async def put(self, key: str, value: str) -> None:
        try:
            await self.client.set(key, value)
        except RedisError as e:
            logger.error(f"Redis put failed for {key}: {e}")
            raise StoreUnavailableError(str(e), {"operation": "put", "key": key}) from e

    async def health_check(self) -> dict[str, Any]:
        """
        Check Redis connectivity.

        Returns:
            Dictionary with status and backend name
        """
        try:
            await self.client.ping()
            return {"status": "healthy", "backend": self.backend}
        except RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return {"status": "unhealthy", "backend": self.backend, "error": str(e)}

    async def close(self) -> None:
        await self.client.aclose()
        logger.info("Redis connection closed")
