"""
Shared configuration management for the blogs-cache library.
"""

from pydantic import AliasChoices, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.errors import ConfigurationError


class CacheSettings(BaseSettings):
    """Connection and runtime settings for the cache layer."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CACHE_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Environment
    env: str = "local"
    log_level: str = "info"

    # Store connection
    redis_url: str = Field(validation_alias=AliasChoices("REDIS_URL", "CACHE_REDIS_URL"))
    socket_timeout: float = 5.0
    socket_connect_timeout: float = 5.0
    health_check_interval: int = 30

    # Store client retries (capped linear backoff)
    max_retries: int = Field(default=3, ge=0)
    retry_backoff_step: float = Field(default=0.05, gt=0)
    retry_backoff_cap: float = Field(default=2.0, gt=0)


def load_settings(**overrides) -> CacheSettings:
    """Load settings from the environment, failing fast when they are invalid."""
    try:
        return CacheSettings(**overrides)
    except PydanticValidationError as e:
        missing = [".".join(str(part) for part in error["loc"]) for error in e.errors()]
        raise ConfigurationError(
            "REDIS_URL environment variable is not set" if "redis_url" in missing or "REDIS_URL" in missing
            else "Invalid cache configuration",
            {"fields": missing}
        ) from e
