"""
Caching patterns built on the cache service.

Each pattern wraps a shared CacheService with a fixed key prefix and
domain-specific TTL defaults:
- session_cache: authenticated sessions (24h TTL)
- api_cache: cache-aside API responses
- rate_limiter: fixed-window request budgets
- counter: view counts and analytics counters
"""

from .api_cache import ApiCache
from .counter import Counter
from .rate_limiter import RateLimiter
from .session_cache import SessionCache

__all__ = ["ApiCache", "Counter", "RateLimiter", "SessionCache"]
