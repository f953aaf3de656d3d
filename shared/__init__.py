"""
Shared utilities for the blogs-cache library.

This package aggregates the ambient building blocks used by the cache layer:

- config: Connection settings via pydantic-settings
- logging: Structured logging with request correlation
- errors: Canonical error types and responses
- test_helpers: Sample data factories for tests

Do not import from blogs_cache into shared/.
"""
