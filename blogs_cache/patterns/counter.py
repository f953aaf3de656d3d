"""
Named counters for view counts and analytics.
"""

import asyncio
from typing import Dict, List

from ..cache.cache_service import CacheService
from ..cache.key_builder import build_key
from ..models import CacheKeyComponents

COUNTER_PREFIX = "counter"


class Counter:
    """Atomic integer counters keyed by resource type and id."""

    def __init__(self, cache: CacheService):
        self.cache = cache

    def _make_key(self, resource: str, id: str) -> str:
        return build_key(CacheKeyComponents(service=COUNTER_PREFIX, resource=resource, id=id))

    async def increment(self, resource: str, id: str) -> int:
        """Increment a counter, returning the new value."""
        return await self.cache.incr(self._make_key(resource, id))

    async def increment_by(self, resource: str, id: str, amount: int) -> int:
        """Add ``amount`` to a counter, returning the new value."""
        return await self.cache.incr_by(self._make_key(resource, id), amount)

    async def decrement(self, resource: str, id: str) -> int:
        """Decrement a counter, stopping at zero."""
        return await self.cache.decr_floor(self._make_key(resource, id))

    async def get(self, resource: str, id: str) -> int:
        """Counter value, 0 if it does not exist."""
        value = await self.cache.get(self._make_key(resource, id))
        return value if isinstance(value, int) and not isinstance(value, bool) else 0

    async def get_multiple(self, resource: str, ids: List[str]) -> Dict[str, int]:
        """Counter values for several ids of one resource type."""
        values = await asyncio.gather(*(self.get(resource, id) for id in ids))
        return dict(zip(ids, values))

    async def set(self, resource: str, id: str, value: int) -> bool:
        """Set a counter to a specific value."""
        return await self.cache.set(self._make_key(resource, id), value)

    async def reset(self, resource: str, id: str) -> bool:
        """Reset a counter by deleting it."""
        return await self.cache.delete(self._make_key(resource, id))
