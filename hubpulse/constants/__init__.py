"""Constants module for HubPulse.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Endpoint paths, status families, telemetry identifiers
- timeouts.py: Timeout and delay values (seconds)
- limits.py: Batch sizes and health scoring thresholds
- defaults.py: Default values for settings and normalization
"""

from hubpulse.constants.defaults import (
    MEMORY_LIMIT_MB_DEFAULT,
    NOT_AVAILABLE,
    REGION_DEFAULT,
)
from hubpulse.constants.enums import (
    FetchState,
    HealthStatus,
    MetricOutcome,
    MetricsLoadingState,
    PlatformVariant,
    Region,
)
from hubpulse.constants.limits import (
    METRICS_BATCH_SIZE,
    METRICS_RANGE_MINUTES,
)
from hubpulse.constants.timeouts import (
    DATASOURCE_CACHE_TTL,
    METRICS_BATCH_DELAY,
    METRICS_QUERY_TIMEOUT,
)
from hubpulse.constants.values import (
    APP_TITLE,
    REGION_BASE_URLS,
)

__all__ = [
    "APP_TITLE",
    "DATASOURCE_CACHE_TTL",
    "MEMORY_LIMIT_MB_DEFAULT",
    "METRICS_BATCH_DELAY",
    "METRICS_BATCH_SIZE",
    "METRICS_QUERY_TIMEOUT",
    "METRICS_RANGE_MINUTES",
    "NOT_AVAILABLE",
    "REGION_BASE_URLS",
    "REGION_DEFAULT",
    "FetchState",
    "HealthStatus",
    "MetricOutcome",
    "MetricsLoadingState",
    "PlatformVariant",
    "Region",
]
