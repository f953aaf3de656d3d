"""
API response caching (cache-aside) for blog resources.
"""

from typing import Any, List, Optional

from ..cache.cache_service import CacheService
from ..cache.key_builder import build_key, escape_glob
from ..models import CacheKeyComponents

API_PREFIX = "api"

DEFAULT_POST_TTL = 3600      # 1 hour
DEFAULT_LIST_TTL = 300       # 5 minutes
DEFAULT_CATEGORY_TTL = 3600  # 1 hour
DEFAULT_PROFILE_TTL = 1800   # 30 minutes


class ApiCache:
    """Cache for API responses keyed by resource kind."""

    def __init__(self, cache: CacheService):
        self.cache = cache

    def _make_key(self, resource: str, id: str, field: Optional[str] = None) -> str:
        return build_key(CacheKeyComponents(service=API_PREFIX, resource=resource, id=id, field=field))

    # Posts

    async def cache_post(self, post_id: str, post: Any, ttl: int = DEFAULT_POST_TTL) -> bool:
        """Cache a blog post."""
        return await self.cache.set(self._make_key("post", post_id), post, ttl)

    async def get_post(self, post_id: str) -> Optional[Any]:
        """Get a cached post."""
        return await self.cache.get(self._make_key("post", post_id))

    async def invalidate_post(self, post_id: str) -> bool:
        """Invalidate a cached post."""
        return await self.cache.delete(self._make_key("post", post_id))

    async def cache_author_posts(self, author_id: str, posts: List[Any], ttl: int = DEFAULT_LIST_TTL) -> bool:
        """Cache the post listing of an author."""
        return await self.cache.set(self._make_key("author", author_id, "posts"), posts, ttl)

    async def get_author_posts(self, author_id: str) -> Optional[List[Any]]:
        """Get the cached post listing of an author."""
        return await self.cache.get(self._make_key("author", author_id, "posts"))

    async def invalidate_author_posts(self, author_id: str) -> int:
        """Invalidate everything cached for an author."""
        return await self.cache.delete_pattern(self._make_key("author", escape_glob(author_id), "*"))

    # Lists

    async def cache_list(self, list_type: str, data: List[Any], ttl: int = DEFAULT_LIST_TTL) -> bool:
        """Cache a list such as "trending" or "recent"."""
        return await self.cache.set(self._make_key("list", list_type), data, ttl)

    async def get_list(self, list_type: str) -> Optional[List[Any]]:
        """Get a cached list."""
        return await self.cache.get(self._make_key("list", list_type))

    async def invalidate_list(self, list_type: str) -> bool:
        """Invalidate a cached list."""
        return await self.cache.delete(self._make_key("list", list_type))

    # Categories

    async def cache_category(self, category_id: str, category: Any, ttl: int = DEFAULT_CATEGORY_TTL) -> bool:
        """Cache category data."""
        return await self.cache.set(self._make_key("category", category_id), category, ttl)

    async def get_category(self, category_id: str) -> Optional[Any]:
        """Get cached category data."""
        return await self.cache.get(self._make_key("category", category_id))

    async def invalidate_category(self, category_id: str) -> bool:
        """Invalidate cached category data."""
        return await self.cache.delete(self._make_key("category", category_id))

    # Profiles

    async def cache_profile(self, user_id: str, profile: Any, ttl: int = DEFAULT_PROFILE_TTL) -> bool:
        """Cache a user profile."""
        return await self.cache.set(self._make_key("user", user_id, "profile"), profile, ttl)

    async def get_profile(self, user_id: str) -> Optional[Any]:
        """Get a cached user profile."""
        return await self.cache.get(self._make_key("user", user_id, "profile"))

    async def invalidate_profile(self, user_id: str) -> bool:
        """Invalidate a cached user profile."""
        return await self.cache.delete(self._make_key("user", user_id, "profile"))

    async def invalidate_all(self) -> int:
        """Invalidate all API cache entries. Use with caution in production."""
        return await self.cache.delete_pattern(f"{API_PREFIX}:*")
