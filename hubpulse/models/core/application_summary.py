"""Normalized application models shared by every deployment platform."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from hubpulse.constants.defaults import MEMORY_LIMIT_MB_DEFAULT, NOT_AVAILABLE
from hubpulse.constants.enums import HealthStatus, PlatformVariant
from hubpulse.constants.values import (
    ACTIVE_STATUSES,
    RUNNING_FAMILY_STATUSES,
    STOPPED_FAMILY_STATUSES,
)

if TYPE_CHECKING:
    from hubpulse.scoring.health_calculator import HealthResult


class ApplicationMetrics(BaseModel):
    """Latest telemetry readings for one application.

    Each field is independently present or absent. An error rate of 0.0 is a
    measurement (no failed traffic), not a missing value.
    """

    cpu: float | None = None
    memory: float | None = None
    error_rate: float | None = None

    @property
    def has_any(self) -> bool:
        return (
            self.cpu is not None
            or self.memory is not None
            or self.error_rate is not None
        )


class ApplicationSummary(BaseModel):
    """One discovered deployment, normalized across CH1, CH2 and Hybrid."""

    id: str
    name: str
    domain: str
    platform_variant: PlatformVariant
    status: str
    health_score: int = 100
    health_status: HealthStatus = HealthStatus.HEALTHY
    metrics: ApplicationMetrics = Field(default_factory=ApplicationMetrics)
    metrics_error: str | None = None
    metrics_status: int | None = None
    memory_limit_mb: int = MEMORY_LIMIT_MB_DEFAULT
    runtime_version: str = NOT_AVAILABLE
    region: str = NOT_AVAILABLE
    replicas: int | None = None
    workers: int | None = None
    worker_type: str | None = None
    deployment_id: str | None = None
    last_updated: int | None = None
    raw_data: dict[str, Any] = Field(default_factory=dict, repr=False)

    @property
    def normalized_status(self) -> str:
        return (self.status or "").upper()

    @property
    def is_running_family(self) -> bool:
        return self.normalized_status in RUNNING_FAMILY_STATUSES

    @property
    def is_stopped_family(self) -> bool:
        return self.normalized_status in STOPPED_FAMILY_STATUSES

    @property
    def is_active(self) -> bool:
        """True when the app counts towards the dashboard's running bucket."""
        return self.normalized_status in ACTIVE_STATUSES

    @property
    def has_telemetry(self) -> bool:
        """Hybrid runtimes are not wired into Visualizer."""
        return self.platform_variant is not PlatformVariant.HYBRID

    def apply_health(self, result: HealthResult) -> None:
        """Set score and classification together."""
        self.health_score = result.score
        self.health_status = result.status


class AppMetricsUpdate(BaseModel):
    """Refreshed per-application fields carried by a metrics progress event."""

    id: str
    metrics: ApplicationMetrics
    metrics_error: str | None = None
    metrics_status: int | None = None
    health_score: int
    health_status: HealthStatus

    @classmethod
    def from_application(cls, app: ApplicationSummary) -> AppMetricsUpdate:
        return cls(
            id=app.id,
            metrics=app.metrics.model_copy(),
            metrics_error=app.metrics_error,
            metrics_status=app.metrics_status,
            health_score=app.health_score,
            health_status=app.health_status,
        )
