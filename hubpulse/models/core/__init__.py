"""Core domain models."""

from hubpulse.models.core.application_summary import (
    ApplicationMetrics,
    ApplicationSummary,
    AppMetricsUpdate,
)
from hubpulse.models.core.dashboard_summary import DashboardSnapshot, DashboardSummary

__all__ = [
    "AppMetricsUpdate",
    "ApplicationMetrics",
    "ApplicationSummary",
    "DashboardSnapshot",
    "DashboardSummary",
]
