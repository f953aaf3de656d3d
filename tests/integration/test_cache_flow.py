"""
Integration tests for the cache layer flows across patterns.
"""

import pytest
from datetime import datetime

from redis.exceptions import ConnectionError as RedisConnectionError

from blogs_cache import CacheLayer, RateLimitConfig, SessionData, is_valid_key
from shared.test_helpers import TestDataFactory


@pytest.mark.integration
class TestCacheFlow:
    """End-to-end flows over one shared store."""

    @pytest.fixture
    def layer(self, fake_redis):
        """Cache layer over the in-memory store."""
        return CacheLayer(fake_redis)

    @pytest.mark.asyncio
    async def test_login_activity_logout(self, layer, test_users, fake_redis):
        """Test a session lifecycle from login to bulk eviction."""
        author = test_users[0]
        session = SessionData(**TestDataFactory.create_session_record(author))

        await layer.sessions.set("web", session)
        await layer.sessions.set("mobile", session)
        fake_redis.advance(600)
        await layer.sessions.refresh(author.user_id, "web")

        assert await layer.sessions.get_ttl(author.user_id, "web") == 86400
        assert await layer.sessions.get_ttl(author.user_id, "mobile") == 86400 - 600

        restored = await layer.sessions.get(author.user_id, "web")
        assert isinstance(restored.created_at, datetime)

        assert await layer.sessions.delete_all_for_user(author.user_id) == 2
        assert await layer.sessions.get(author.user_id, "mobile") is None

    @pytest.mark.asyncio
    async def test_post_view_counting_and_invalidation(self, layer, test_users):
        """Test cached posts, view counters and author invalidation together."""
        author = test_users[0]
        posts = TestDataFactory.create_test_posts()

        await layer.api.cache_author_posts(author.user_id, posts)
        await layer.api.cache_profile(author.user_id, TestDataFactory.create_test_profile(author))
        for post in posts:
            await layer.api.cache_post(post["id"], post)
            await layer.counter.increment("views", post["id"])
        await layer.counter.increment_by("views", "post-1", 9)

        assert await layer.api.get_author_posts(author.user_id) == posts
        assert await layer.counter.get_multiple("views", ["post-1", "post-2"]) == {"post-1": 10, "post-2": 1}

        assert await layer.api.invalidate_author_posts(author.user_id) == 1
        assert await layer.api.get_profile(author.user_id) is not None

        assert await layer.api.invalidate_all() == 3
        assert await layer.counter.get("views", "post-1") == 10

    @pytest.mark.asyncio
    async def test_rate_limit_per_user(self, layer, test_users, fake_redis):
        """Test rate limits are tracked per identifier and recover after the window."""
        config = RateLimitConfig(max_requests=3, window_seconds=10)
        reader = test_users[1]

        outcomes = [(await layer.rate_limiter.check_limit(reader.user_id, config)).allowed for _ in range(4)]
        assert outcomes == [True, True, True, False]
        assert (await layer.rate_limiter.check_limit(test_users[2].user_id, config)).allowed is True

        fake_redis.advance(10)

        assert (await layer.rate_limiter.check_limit(reader.user_id, config)).allowed is True

    @pytest.mark.asyncio
    async def test_store_outage_is_absorbed(self, layer, test_users, fake_redis):
        """Test every pattern keeps answering while the store is down."""
        author = test_users[0]
        fake_redis.fail_with = RedisConnectionError("Connection refused")

        assert await layer.sessions.get(author.user_id, "web") is None
        assert await layer.api.get_post("post-1") is None
        assert await layer.counter.increment("views", "post-1") == 0
        assert (await layer.rate_limiter.check_limit(author.user_id, RateLimitConfig(max_requests=1, window_seconds=5))).allowed is True

        result = await layer.cache.fetch("api:post:post-1")
        assert result.ok is False

    @pytest.mark.asyncio
    async def test_written_keys_follow_convention(self, layer, test_users, fake_redis):
        """Test keys written by the structured patterns parse back."""
        author = test_users[0]
        await layer.sessions.set("web", SessionData(**TestDataFactory.create_session_record(author)))
        await layer.api.cache_profile(author.user_id, {"bio": None})
        await layer.counter.increment("likes", "post-1")

        keys = await fake_redis.keys("*")

        assert keys == ["api:user:user-1:profile", "counter:likes:post-1", "session:user-1:web"]
        assert all(is_valid_key(key) for key in keys)
