"""Dashboard snapshot and fleet summary models."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field

from hubpulse.constants.enums import HealthStatus, MetricsLoadingState, PlatformVariant
from hubpulse.models.core.application_summary import ApplicationSummary


class DashboardSummary(BaseModel):
    """Fleet-wide counters derived from the current application set."""

    total: int = 0
    healthy: int = 0
    warning: int = 0
    critical: int = 0
    running: int = 0
    stopped: int = 0
    ch1_count: int = 0
    ch2_count: int = 0
    hybrid_count: int = 0

    @classmethod
    def from_applications(cls, applications: Iterable[ApplicationSummary]) -> DashboardSummary:
        """Recompute every counter from scratch."""
        apps = list(applications)
        running = sum(1 for app in apps if app.is_active)
        return cls(
            total=len(apps),
            healthy=sum(1 for app in apps if app.health_status is HealthStatus.HEALTHY),
            warning=sum(1 for app in apps if app.health_status is HealthStatus.WARNING),
            critical=sum(1 for app in apps if app.health_status is HealthStatus.CRITICAL),
            running=running,
            stopped=len(apps) - running,
            ch1_count=sum(
                1 for app in apps if app.platform_variant is PlatformVariant.CLOUDHUB_1
            ),
            ch2_count=sum(
                1 for app in apps if app.platform_variant is PlatformVariant.CLOUDHUB_2
            ),
            hybrid_count=sum(
                1 for app in apps if app.platform_variant is PlatformVariant.HYBRID
            ),
        )


class DashboardSnapshot(BaseModel):
    """State of one aggregation run, handed to the presentation layer."""

    session_id: int
    environment_id: str
    environment_name: str
    organization_id: str
    organization_name: str = ""
    applications: list[ApplicationSummary] = Field(default_factory=list)
    summary: DashboardSummary = Field(default_factory=DashboardSummary)
    last_refreshed: float = 0.0
    metrics_loading_state: MetricsLoadingState = MetricsLoadingState.IDLE
    metrics_error: str | None = None
    source_states: dict[str, dict[str, Any]] = Field(default_factory=dict)

    def find_application(self, app_id: str) -> ApplicationSummary | None:
        for app in self.applications:
            if app.id == app_id:
                return app
        return None

    def refresh_summary(self) -> DashboardSummary:
        self.summary = DashboardSummary.from_applications(self.applications)
        return self.summary
