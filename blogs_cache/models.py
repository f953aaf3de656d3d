"""
Data models for the blogs-cache library.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class CacheKeyComponents:
    """Structured parts of a ``service:resource:id[:field]`` cache key."""
    service: str
    resource: str
    id: str
    field: Optional[str] = None


class SessionData(BaseModel):
    """Authenticated session record."""

    user_id: str
    email: str
    role: str
    created_at: datetime


class RateLimitConfig(BaseModel):
    """Rate limit configuration."""

    max_requests: int = Field(gt=0)
    window_seconds: int = Field(gt=0)


class RateLimitResult(BaseModel):
    """Rate limit check result."""

    allowed: bool
    remaining: int
    reset_at: int  # Unix epoch milliseconds


class CacheErrorKind(str, Enum):
    """Failure categories for cache operations."""
    CONNECTION = "connection"
    TIMEOUT = "timeout"
    SERIALIZATION = "serialization"
    STORE = "store"
    UNKNOWN = "unknown"


@dataclass
class CacheResult:
    """Outcome of a single cache operation.

    A successful read of a missing key is ``ok=True`` with ``value=None``;
    a store failure is ``ok=False`` with ``error_kind`` set.
    """
    ok: bool
    value: Any = None
    error: Optional[str] = None
    error_kind: Optional[CacheErrorKind] = None

    @classmethod
    def success(cls, value: Any = None) -> "CacheResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str, error_kind: CacheErrorKind) -> "CacheResult":
        return cls(ok=False, error=error, error_kind=error_kind)

    @property
    def hit(self) -> bool:
        """Whether the operation succeeded and produced a value."""
        return self.ok and self.value is not None

    def unwrap_or(self, default: Any) -> Any:
        """Return the value on success, ``default`` on failure."""
        return self.value if self.ok else default
