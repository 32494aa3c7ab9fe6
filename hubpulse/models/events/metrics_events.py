"""Progress events emitted while metrics are loaded for a snapshot.

Every event carries the session id of the aggregation run that produced it so
consumers can drop updates from a superseded run.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from hubpulse.models.core.application_summary import AppMetricsUpdate
from hubpulse.models.core.dashboard_summary import DashboardSummary


class MetricsStarted(BaseModel):
    session_id: int
    total: int


class MetricsProgress(BaseModel):
    session_id: int
    completed: int
    total: int
    updated_apps: list[AppMetricsUpdate] = Field(default_factory=list)


class MetricsComplete(BaseModel):
    session_id: int
    summary: DashboardSummary
    metrics_error: str | None = None
    # Set when apps were marked without a batch, e.g. datasource unavailable
    updated_apps: list[AppMetricsUpdate] = Field(default_factory=list)


MetricsEvent = MetricsStarted | MetricsProgress | MetricsComplete

__all__ = [
    "MetricsComplete",
    "MetricsEvent",
    "MetricsProgress",
    "MetricsStarted",
]
