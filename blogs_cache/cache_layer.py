"""
Composition root wiring settings, connection, cache service and patterns.
"""

from typing import Optional

import redis.asyncio as redis

from shared.config import CacheSettings, load_settings
from shared.logging import configure_logging, get_logger
from .cache.cache_service import CacheService
from .client import RedisConnection
from .patterns import ApiCache, Counter, RateLimiter, SessionCache


class CacheLayer:
    """All caching patterns sharing one Redis connection.

    Usage::

        async with await CacheLayer.connect() as layer:
            await layer.sessions.set(session_id, session)
            result = await layer.rate_limiter.check_limit(user_id, config)
    """

    def __init__(self, redis_client: redis.Redis, connection: Optional[RedisConnection] = None):
        self.connection = connection
        self.cache = CacheService(redis_client)
        self.sessions = SessionCache(self.cache)
        self.api = ApiCache(self.cache)
        self.rate_limiter = RateLimiter(self.cache)
        self.counter = Counter(self.cache)

    @classmethod
    async def connect(cls, settings: Optional[CacheSettings] = None, configure_logs: bool = False) -> "CacheLayer":
        """Open a connection from settings (the environment by default)."""
        settings = settings or load_settings()
        if configure_logs:
            configure_logging("blogs_cache", settings.log_level)
        connection = RedisConnection(settings)
        client = await connection.start()
        get_logger("blogs_cache.layer").info("Cache layer ready", env=settings.env)
        return cls(client, connection)

    async def health_check(self) -> bool:
        """Check the underlying connection."""
        if self.connection is None:
            return False
        return await self.connection.health_check()

    async def close(self) -> None:
        """Close the connection this layer opened."""
        if self.connection is not None:
            await self.connection.stop()

    async def __aenter__(self) -> "CacheLayer":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
