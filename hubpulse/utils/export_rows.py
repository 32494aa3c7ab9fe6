"""Flatten a dashboard snapshot into tabular rows for export."""

from __future__ import annotations

from hubpulse.constants.defaults import NOT_AVAILABLE
from hubpulse.models.core.application_summary import ApplicationSummary
from hubpulse.models.core.dashboard_summary import DashboardSnapshot

EXPORT_HEADERS: tuple[str, ...] = (
    "Application",
    "Type",
    "Status",
    "Health Score",
    "Health Status",
    "CPU %",
    "Memory MB",
    "Runtime Version",
    "Region",
)


def _format_cpu(value: float | None) -> str:
    return NOT_AVAILABLE if value is None else f"{value:.1f}"


def _format_memory(value: float | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return str(int(value)) if float(value).is_integer() else str(value)


def application_row(app: ApplicationSummary) -> list[str]:
    return [
        app.name,
        app.platform_variant.value,
        app.status,
        str(app.health_score),
        app.health_status.value,
        _format_cpu(app.metrics.cpu),
        _format_memory(app.metrics.memory),
        app.runtime_version or NOT_AVAILABLE,
        app.region or NOT_AVAILABLE,
    ]


def to_export_rows(snapshot: DashboardSnapshot) -> list[list[str]]:
    """Header row followed by one row per application, in snapshot order."""
    return [list(EXPORT_HEADERS)] + [
        application_row(app) for app in snapshot.applications
    ]
