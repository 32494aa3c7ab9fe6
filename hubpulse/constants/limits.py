"""Limit and threshold constants for HubPulse.

All limit values, scoring thresholds, and validation ranges.
"""

from typing import Final

# ============================================================================
# Metrics polling limits
# ============================================================================

METRICS_BATCH_SIZE: Final = 5
METRICS_RANGE_MINUTES: Final = 15
METRICS_BATCH_SIZE_MIN: Final = 1
METRICS_BATCH_SIZE_MAX: Final = 50

# ============================================================================
# Health score bounds and buckets
# ============================================================================

HEALTH_SCORE_MAX: Final = 100
HEALTH_SCORE_MIN: Final = 0
HEALTHY_SCORE_MIN: Final = 80
WARNING_SCORE_MIN: Final = 60

# ============================================================================
# Health deductions
# ============================================================================

STOPPED_STATUS_PENALTY: Final = 40
UNKNOWN_STATUS_PENALTY: Final = 20
MISSING_METRICS_PENALTY: Final = 25

CPU_CRITICAL_PCT: Final = 90
CPU_WARNING_PCT: Final = 75
MEMORY_CRITICAL_PCT: Final = 90
MEMORY_WARNING_PCT: Final = 75
USAGE_CRITICAL_PENALTY: Final = 20
USAGE_WARNING_PENALTY: Final = 10

ERROR_RATE_CRITICAL_PCT: Final = 10
ERROR_RATE_WARNING_PCT: Final = 5
ERROR_RATE_NOTICE_PCT: Final = 1
ERROR_RATE_CRITICAL_PENALTY: Final = 20
ERROR_RATE_WARNING_PENALTY: Final = 10
ERROR_RATE_NOTICE_PENALTY: Final = 5

__all__ = [
    "CPU_CRITICAL_PCT",
    "CPU_WARNING_PCT",
    "ERROR_RATE_CRITICAL_PCT",
    "ERROR_RATE_CRITICAL_PENALTY",
    "ERROR_RATE_NOTICE_PCT",
    "ERROR_RATE_NOTICE_PENALTY",
    "ERROR_RATE_WARNING_PCT",
    "ERROR_RATE_WARNING_PENALTY",
    "HEALTHY_SCORE_MIN",
    "HEALTH_SCORE_MAX",
    "HEALTH_SCORE_MIN",
    "MEMORY_CRITICAL_PCT",
    "MEMORY_WARNING_PCT",
    "METRICS_BATCH_SIZE",
    "METRICS_BATCH_SIZE_MAX",
    "METRICS_BATCH_SIZE_MIN",
    "METRICS_RANGE_MINUTES",
    "MISSING_METRICS_PENALTY",
    "STOPPED_STATUS_PENALTY",
    "UNKNOWN_STATUS_PENALTY",
    "USAGE_CRITICAL_PENALTY",
    "USAGE_WARNING_PENALTY",
    "WARNING_SCORE_MIN",
]
