"""Settings and error models."""

from hubpulse.models.state.app_settings import AppSettings, ConfigError, ConfigLoadError
from hubpulse.models.state.config_manager import ConfigManager
from hubpulse.models.state.errors import (
    AggregationError,
    HubPulseError,
    MetricQueryError,
    SourceUnavailableError,
)

__all__ = [
    "AggregationError",
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "HubPulseError",
    "MetricQueryError",
    "SourceUnavailableError",
]
