"""All enum definitions for HubPulse.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# Platform Enums
# =============================================================================

class PlatformVariant(Enum):
    """Deployment platform an application was discovered on."""

    CLOUDHUB_1 = "CH1"
    CLOUDHUB_2 = "CH2"
    HYBRID = "HYBRID"


class Region(Enum):
    """Anypoint control plane regions."""

    US = "us"
    EU = "eu"
    GOV = "gov"


# =============================================================================
# Health Enums
# =============================================================================

class HealthStatus(Enum):
    """Health classification derived from a health score."""

    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


# =============================================================================
# Fetch State Enums
# =============================================================================

class FetchState(Enum):
    """Data fetch state values."""

    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class FetchSources(Enum):
    """Deployment listing source identifiers."""

    CLOUDHUB_1 = "cloudhub1_applications"
    CLOUDHUB_2 = "cloudhub2_applications"
    HYBRID = "hybrid_applications"


class MetricsLoadingState(Enum):
    """Progress of the metrics refinement pass for a dashboard snapshot."""

    IDLE = "idle"
    LOADING = "loading"
    COMPLETE = "complete"
    ERROR = "error"


class MetricOutcome(Enum):
    """Outcome of a single telemetry query."""

    OK = "ok"
    NO_DATA = "no_data"
    TIMEOUT = "timeout"
    QUERY_ERROR = "query_error"


__all__ = [
    "FetchSources",
    "FetchState",
    "HealthStatus",
    "MetricOutcome",
    "MetricsLoadingState",
    "PlatformVariant",
    "Region",
]
