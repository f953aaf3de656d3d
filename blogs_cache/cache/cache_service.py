"""
Core cache service over Redis.

Every operation is fail-soft: store, transport and serialization errors are
logged and turned into a safe default. Callers that need to tell a miss from
an unreachable store use :meth:`CacheService.fetch`, which returns a
:class:`~blogs_cache.models.CacheResult` instead.
"""

from typing import Any, Awaitable, Callable, Optional, Tuple

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from shared.logging import cache_context, get_logger
from ..models import CacheErrorKind, CacheResult
from .serializer import deserialize, serialize

# Increment a window counter and start its expiry on the first hit, atomically.
INCR_WITH_EXPIRY_SCRIPT = """
local count = redis.call('INCR', KEYS[1])
if count == 1 then
  redis.call('EXPIRE', KEYS[1], ARGV[1])
end
return {count, redis.call('TTL', KEYS[1])}
"""

# Decrement a counter without going below zero, atomically.
DECR_FLOOR_SCRIPT = """
local value = redis.call('DECR', KEYS[1])
if value < 0 then
  redis.call('SET', KEYS[1], 0)
  return 0
end
return value
"""

NO_EXPIRY = -1
KEY_MISSING = -2


def classify_error(error: Exception) -> CacheErrorKind:
    """Map an exception raised during a cache operation to a failure kind."""
    if isinstance(error, RedisTimeoutError):
        return CacheErrorKind.TIMEOUT
    if isinstance(error, RedisConnectionError):
        return CacheErrorKind.CONNECTION
    if isinstance(error, RedisError):
        return CacheErrorKind.STORE
    if isinstance(error, (ValueError, TypeError)):
        return CacheErrorKind.SERIALIZATION
    return CacheErrorKind.UNKNOWN


class CacheService:
    """Type-agnostic caching operations with automatic serialization."""

    def __init__(self, redis_client: redis.Redis):
        self.redis = redis_client
        self.logger = get_logger("blogs_cache.cache")

    async def _execute(self, operation: str, target: str, call: Callable[[], Awaitable[Any]]) -> CacheResult:
        with cache_context(operation, target):
            try:
                return CacheResult.success(await call())
            except Exception as e:
                kind = classify_error(e)
                self.logger.error(
                    "Cache operation failed",
                    operation=operation,
                    key=target,
                    error=str(e),
                    error_kind=kind.value
                )
                return CacheResult.failure(str(e), kind)

    async def fetch(self, key: str) -> CacheResult:
        """Read a key, reporting failures instead of hiding them."""
        async def _get() -> Any:
            data = await self.redis.get(key)
            if not data:
                return None
            return deserialize(data)

        return await self._execute("get", key, _get)

    async def get(self, key: str) -> Optional[Any]:
        """Get a value, or ``None`` if missing or unreadable."""
        result = await self.fetch(key)
        if result.hit:
            self.logger.debug("Cache hit", key=key)
        return result.unwrap_or(None)

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Store a value, expiring after ``ttl`` seconds when given."""
        async def _set() -> None:
            data = serialize(value)
            if ttl:
                await self.redis.setex(key, ttl, data)
            else:
                await self.redis.set(key, data)

        result = await self._execute("set", key, _set)
        return result.ok

    async def delete(self, key: str) -> bool:
        """Delete a key."""
        result = await self._execute("delete", key, lambda: self.redis.delete(key))
        return result.ok

    async def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching a glob pattern, returning the count."""
        async def _delete_pattern() -> int:
            keys = await self.redis.keys(pattern)
            if not keys:
                return 0
            deleted = await self.redis.delete(*keys)
            self.logger.info("Deleted keys by pattern", pattern=pattern, count=deleted)
            return deleted

        result = await self._execute("delete_pattern", pattern, _delete_pattern)
        return result.unwrap_or(0)

    async def incr(self, key: str) -> int:
        """Atomically increment a counter."""
        result = await self._execute("incr", key, lambda: self.redis.incr(key))
        return result.unwrap_or(0)

    async def incr_by(self, key: str, amount: int) -> int:
        """Atomically add ``amount`` to a counter."""
        result = await self._execute("incr_by", key, lambda: self.redis.incrby(key, amount))
        return result.unwrap_or(0)

    async def decr_floor(self, key: str) -> int:
        """Atomically decrement a counter, never going below zero."""
        async def _decr_floor() -> int:
            return int(await self.redis.eval(DECR_FLOOR_SCRIPT, 1, key))

        result = await self._execute("decr_floor", key, _decr_floor)
        return result.unwrap_or(0)

    async def incr_with_expiry(self, key: str, seconds: int) -> Tuple[int, int]:
        """Increment a counter, starting a ``seconds`` expiry on its first increment.

        Returns the new count and the key's remaining TTL.
        """
        async def _incr_with_expiry() -> Tuple[int, int]:
            count, ttl = await self.redis.eval(INCR_WITH_EXPIRY_SCRIPT, 1, key, seconds)
            return int(count), int(ttl)

        result = await self._execute("incr_with_expiry", key, _incr_with_expiry)
        return result.unwrap_or((0, NO_EXPIRY))

    async def expire(self, key: str, seconds: int) -> bool:
        """Set a key's time to live."""
        result = await self._execute("expire", key, lambda: self.redis.expire(key, seconds))
        return result.ok

    async def ttl(self, key: str) -> int:
        """Remaining TTL in seconds (-1 if no expiry, -2 if the key is missing)."""
        result = await self._execute("ttl", key, lambda: self.redis.ttl(key))
        return result.unwrap_or(NO_EXPIRY)
