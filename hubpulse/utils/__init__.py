"""Utility functions for HubPulse."""

from hubpulse.utils.export_rows import EXPORT_HEADERS, to_export_rows
from hubpulse.utils.logging_config import configure_logging

__all__ = [
    "EXPORT_HEADERS",
    "configure_logging",
    "to_export_rows",
]
