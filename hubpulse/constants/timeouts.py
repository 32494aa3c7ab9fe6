"""Timeout constants for HubPulse.

All timeout and interval values for API requests and async operations.
"""

from typing import Final

# ============================================================================
# HTTP timeouts (float, in seconds)
# ============================================================================

HTTP_REQUEST_TIMEOUT: Final = 30.0

# ============================================================================
# Telemetry timeouts (float, in seconds)
# ============================================================================

# Deadline for each individual Visualizer query
METRICS_QUERY_TIMEOUT: Final = 8.0

# Pause between metrics batches to protect the telemetry backend
METRICS_BATCH_DELAY: Final = 0.3

# How long a resolved Visualizer datasource stays valid
DATASOURCE_CACHE_TTL: Final = 5 * 60.0

__all__ = [
    "DATASOURCE_CACHE_TTL",
    "HTTP_REQUEST_TIMEOUT",
    "METRICS_BATCH_DELAY",
    "METRICS_QUERY_TIMEOUT",
]
