"""
Shared pytest fixtures for the blogs-cache test suites.
"""

import pytest

from blogs_cache.cache.cache_service import CacheService
from blogs_cache.tests.fake_redis import FakeRedis
from shared.test_helpers import TestDataFactory


@pytest.fixture
def fake_redis():
    """In-memory Redis double."""
    return FakeRedis()


@pytest.fixture
def cache_service(fake_redis):
    """CacheService backed by the in-memory Redis double."""
    return CacheService(fake_redis)


@pytest.fixture
def test_users():
    """Sample users."""
    return TestDataFactory.create_test_users()
