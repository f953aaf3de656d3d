"""
blogs-cache: shared Redis caching library for the blog platform.

Structure:
- blogs_cache.cache: fail-soft cache service, key builder, serializer.
- blogs_cache.patterns: session, API response, rate limit and counter caches.
- blogs_cache.client: Redis connection with capped linear retry backoff.
- blogs_cache.cache_layer: composition root owning one connection.
"""

from .cache import CacheService, build_key, deserialize, is_valid_key, parse_key, serialize
from .cache_layer import CacheLayer
from .client import RedisConnection, create_redis_client
from .models import (
    CacheErrorKind,
    CacheKeyComponents,
    CacheResult,
    RateLimitConfig,
    RateLimitResult,
    SessionData,
)
from .patterns import ApiCache, Counter, RateLimiter, SessionCache

__version__ = "1.0.0"

__all__ = [
    "CacheLayer",
    "CacheService",
    "RedisConnection",
    "create_redis_client",
    "SessionCache",
    "ApiCache",
    "RateLimiter",
    "Counter",
    "CacheErrorKind",
    "CacheKeyComponents",
    "CacheResult",
    "RateLimitConfig",
    "RateLimitResult",
    "SessionData",
    "build_key",
    "parse_key",
    "is_valid_key",
    "serialize",
    "deserialize",
]
