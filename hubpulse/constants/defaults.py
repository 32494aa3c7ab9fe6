"""Default values for settings.

All default values used in AppSettings model and validation fallback values.
"""

from typing import Final

# ============================================================================
# Connection defaults
# ============================================================================

REGION_DEFAULT: Final = "us"
METRICS_TIMEZONE_DEFAULT: Final = "UTC"
LOG_LEVEL_DEFAULT: Final = "INFO"

# ============================================================================
# Normalization defaults
# ============================================================================

MEMORY_LIMIT_MB_DEFAULT: Final = 1024
CH1_REGION_DEFAULT: Final = "us-e1"
UNKNOWN_VALUE: Final = "Unknown"
UNKNOWN_STATUS: Final = "UNKNOWN"
NOT_AVAILABLE: Final = "N/A"

__all__ = [
    "CH1_REGION_DEFAULT",
    "LOG_LEVEL_DEFAULT",
    "MEMORY_LIMIT_MB_DEFAULT",
    "METRICS_TIMEZONE_DEFAULT",
    "NOT_AVAILABLE",
    "REGION_DEFAULT",
    "UNKNOWN_STATUS",
    "UNKNOWN_VALUE",
]
