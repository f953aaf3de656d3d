"""
Fixed-window rate limiter backed by Redis counters.
"""

import time

from shared.logging import get_logger
from ..cache.cache_service import CacheService
from ..models import RateLimitConfig, RateLimitResult

RATE_LIMIT_PREFIX = "ratelimit"


class RateLimiter:
    """Per-identifier request budgets over a fixed time window.

    The window counter and its expiry are created in one atomic step, so a
    window always ends ``window_seconds`` after its first request.
    """

    def __init__(self, cache: CacheService):
        self.cache = cache
        self.logger = get_logger("blogs_cache.patterns.rate_limiter")

    def _make_key(self, identifier: str) -> str:
        """Generate rate limit key."""
        return f"{RATE_LIMIT_PREFIX}:{identifier}"

    async def check_limit(self, identifier: str, config: RateLimitConfig) -> RateLimitResult:
        """Count a request and report whether it is within the limit."""
        key = self._make_key(identifier)
        count, ttl = await self.cache.incr_with_expiry(key, config.window_seconds)

        if ttl is None or ttl < 0:
            ttl = config.window_seconds
        reset_at = int(time.time() * 1000) + ttl * 1000

        allowed = count <= config.max_requests
        if not allowed:
            self.logger.warning(
                "Rate limit exceeded",
                identifier=identifier,
                current_count=count,
                limit=config.max_requests,
                reset_in_seconds=ttl
            )

        return RateLimitResult(
            allowed=allowed,
            remaining=max(0, config.max_requests - count),
            reset_at=reset_at
        )

    async def reset(self, identifier: str) -> bool:
        """Reset the window for an identifier."""
        return await self.cache.delete(self._make_key(identifier))

    async def get_count(self, identifier: str) -> int:
        """Current request count without incrementing it."""
        value = await self.cache.get(self._make_key(identifier))
        return value if isinstance(value, int) and not isinstance(value, bool) else 0

    async def get_ttl(self, identifier: str) -> int:
        """Remaining seconds in the current window."""
        return await self.cache.ttl(self._make_key(identifier))
