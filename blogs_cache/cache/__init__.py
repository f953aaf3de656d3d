"""
Cache package for the blogs-cache library.

Provides the fail-soft Redis cache service together with the key naming
and serialization helpers every caching pattern builds on.
"""

from .cache_service import CacheService
from .key_builder import build_key, escape_glob, is_valid_key, parse_key
from .serializer import deserialize, serialize

__all__ = [
    "CacheService",
    "build_key",
    "escape_glob",
    "parse_key",
    "is_valid_key",
    "serialize",
    "deserialize",
]
