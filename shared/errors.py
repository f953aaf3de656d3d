"""
Shared error handling for the blogs-cache library.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class CacheLayerException(Exception):
    """Base exception for the cache layer."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class ValidationError(CacheLayerException):
    """Validation-related errors."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None, code: str = "VALIDATION_ERROR"):
        super().__init__(code, message, details)


class KeyValidationError(ValidationError):
    """Cache key components are missing or malformed."""

    def __init__(self, message: str = "service, resource, and id are required for cache key", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details, code="KEY_VALIDATION_ERROR")


class KeyFormatError(ValidationError):
    """Cache key string does not follow the naming convention."""

    def __init__(self, message: str = "Invalid cache key format", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details, code="KEY_FORMAT_ERROR")


class ConfigurationError(CacheLayerException):
    """Configuration-related errors."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class StoreConnectionError(CacheLayerException):
    """Store connection lifecycle errors."""

    def __init__(self, code: str = "REDIS_START_FAILED", message: str = "Redis connection failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(code, message, details)
