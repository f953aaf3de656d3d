"""
Redis connection management for the cache layer.
"""

from typing import Optional

import redis.asyncio as redis
from redis.asyncio.retry import Retry
from redis.backoff import AbstractBackoff
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from shared.config import CacheSettings
from shared.errors import StoreConnectionError
from shared.logging import get_logger


class LinearBackoff(AbstractBackoff):
    """Backoff growing by a fixed step per failure, capped at ``cap`` seconds."""

    def __init__(self, step: float = 0.05, cap: float = 2.0):
        self._step = step
        self._cap = cap

    def reset(self) -> None:
        pass

    def compute(self, failures: int) -> float:
        return min(failures * self._step, self._cap)


def create_redis_client(settings: CacheSettings) -> redis.Redis:
    """Build an asyncio Redis client from settings."""
    retry = Retry(
        LinearBackoff(settings.retry_backoff_step, settings.retry_backoff_cap),
        settings.max_retries,
    )
    return redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=settings.socket_connect_timeout,
        socket_timeout=settings.socket_timeout,
        retry=retry,
        retry_on_error=[RedisConnectionError, RedisTimeoutError],
        health_check_interval=settings.health_check_interval,
    )


class RedisConnection:
    """Owns one Redis client for the lifetime of a cache layer."""

    def __init__(self, settings: CacheSettings):
        self.settings = settings
        self.logger = get_logger("blogs_cache.client")
        self._redis: Optional[redis.Redis] = None

    @property
    def client(self) -> redis.Redis:
        """The connected client."""
        if self._redis is None:
            raise StoreConnectionError("REDIS_NOT_STARTED", "Redis connection has not been started")
        return self._redis

    @property
    def started(self) -> bool:
        return self._redis is not None

    async def start(self) -> redis.Redis:
        """Connect and verify the store is reachable."""
        if self._redis is not None:
            return self._redis

        client = create_redis_client(self.settings)
        try:
            await client.ping()
        except Exception as e:
            self.logger.error("Failed to start Redis connection", error=str(e))
            await client.aclose()
            raise StoreConnectionError("REDIS_START_FAILED", str(e)) from e

        self._redis = client
        self.logger.info("Redis connection started", env=self.settings.env)
        return client

    async def stop(self) -> None:
        """Close the connection."""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
            self.logger.info("Redis connection stopped")

    async def health_check(self) -> bool:
        """Check Redis health."""
        if self._redis is None:
            return False
        try:
            await self._redis.ping()
            return True
        except Exception as e:
            self.logger.warning("Redis health check failed", error=str(e))
            return False
