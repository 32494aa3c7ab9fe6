"""Application settings models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hubpulse.constants.defaults import (
    LOG_LEVEL_DEFAULT,
    MEMORY_LIMIT_MB_DEFAULT,
    METRICS_TIMEZONE_DEFAULT,
    REGION_DEFAULT,
)
from hubpulse.constants.enums import Region
from hubpulse.constants.limits import (
    METRICS_BATCH_SIZE,
    METRICS_BATCH_SIZE_MAX,
    METRICS_BATCH_SIZE_MIN,
    METRICS_RANGE_MINUTES,
)
from hubpulse.constants.timeouts import (
    DATASOURCE_CACHE_TTL,
    HTTP_REQUEST_TIMEOUT,
    METRICS_BATCH_DELAY,
    METRICS_QUERY_TIMEOUT,
)


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True)

    # Control plane
    region: str = REGION_DEFAULT
    base_url: str = ""  # overrides the region's base URL when set
    http_timeout_seconds: float = Field(default=HTTP_REQUEST_TIMEOUT, gt=0)

    # Metrics polling
    metrics_batch_size: int = Field(
        default=METRICS_BATCH_SIZE, ge=METRICS_BATCH_SIZE_MIN, le=METRICS_BATCH_SIZE_MAX
    )
    metrics_batch_delay_seconds: float = Field(default=METRICS_BATCH_DELAY, ge=0)
    metrics_query_timeout_seconds: float = Field(default=METRICS_QUERY_TIMEOUT, gt=0)
    metrics_range_minutes: int = Field(default=METRICS_RANGE_MINUTES, ge=1)
    metrics_timezone: str = METRICS_TIMEZONE_DEFAULT
    datasource_cache_ttl_seconds: float = Field(default=DATASOURCE_CACHE_TTL, gt=0)

    # Normalization
    memory_limit_default_mb: int = Field(default=MEMORY_LIMIT_MB_DEFAULT, gt=0)

    # Logging
    log_level: str = LOG_LEVEL_DEFAULT

    @field_validator("region")
    @classmethod
    def _validate_region(cls, value: str) -> str:
        normalized = value.strip().lower()
        valid = {region.value for region in Region}
        if normalized not in valid:
            raise ValueError(f"region must be one of {sorted(valid)}")
        return normalized

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        return value.strip().upper()


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""
