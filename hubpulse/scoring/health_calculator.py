"""Health score calculation for normalized applications.

A score starts at 100 and loses points for:
- a non-running status (stopped -40, transitional/unknown -20)
- a running app with no telemetry at all (-25)
- high CPU, memory (percent of limit) and error rate

The result is clamped to [0, 100] and bucketed into healthy (>= 80),
warning (>= 60) or critical. The functions here hold no state and may be
called any number of times with the same inputs.
"""

from __future__ import annotations

from dataclasses import dataclass

from hubpulse.constants.defaults import MEMORY_LIMIT_MB_DEFAULT
from hubpulse.constants.enums import HealthStatus, PlatformVariant
from hubpulse.constants.limits import (
    CPU_CRITICAL_PCT,
    CPU_WARNING_PCT,
    ERROR_RATE_CRITICAL_PCT,
    ERROR_RATE_CRITICAL_PENALTY,
    ERROR_RATE_NOTICE_PCT,
    ERROR_RATE_NOTICE_PENALTY,
    ERROR_RATE_WARNING_PCT,
    ERROR_RATE_WARNING_PENALTY,
    HEALTH_SCORE_MAX,
    HEALTH_SCORE_MIN,
    HEALTHY_SCORE_MIN,
    MEMORY_CRITICAL_PCT,
    MEMORY_WARNING_PCT,
    MISSING_METRICS_PENALTY,
    STOPPED_STATUS_PENALTY,
    UNKNOWN_STATUS_PENALTY,
    USAGE_CRITICAL_PENALTY,
    USAGE_WARNING_PENALTY,
    WARNING_SCORE_MIN,
)
from hubpulse.constants.values import RUNNING_FAMILY_STATUSES, STOPPED_FAMILY_STATUSES
from hubpulse.models.core.application_summary import ApplicationMetrics, ApplicationSummary
from hubpulse.utils.resource_parser import normalize_cpu_value, normalize_memory_value


@dataclass(frozen=True)
class HealthResult:
    """Score and its classification; always produced together."""

    score: int
    status: HealthStatus


def classify_score(score: int) -> HealthStatus:
    """Map a score to its health bucket."""
    if score >= HEALTHY_SCORE_MIN:
        return HealthStatus.HEALTHY
    if score >= WARNING_SCORE_MIN:
        return HealthStatus.WARNING
    return HealthStatus.CRITICAL


def _status_penalty(status: str) -> int:
    if status in RUNNING_FAMILY_STATUSES:
        return 0
    if status in STOPPED_FAMILY_STATUSES:
        return STOPPED_STATUS_PENALTY
    return UNKNOWN_STATUS_PENALTY


def _usage_penalty(percent: float, critical: float, warning: float) -> int:
    if percent > critical:
        return USAGE_CRITICAL_PENALTY
    if percent > warning:
        return USAGE_WARNING_PENALTY
    return 0


def _error_rate_penalty(error_rate: float) -> int:
    if error_rate > ERROR_RATE_CRITICAL_PCT:
        return ERROR_RATE_CRITICAL_PENALTY
    if error_rate > ERROR_RATE_WARNING_PCT:
        return ERROR_RATE_WARNING_PENALTY
    if error_rate > ERROR_RATE_NOTICE_PCT:
        return ERROR_RATE_NOTICE_PENALTY
    return 0


def calculate_health(
    status: str | None,
    cpu: float | None = None,
    memory: float | None = None,
    error_rate: float | None = None,
    *,
    variant: PlatformVariant,
    memory_limit_mb: int | None = None,
) -> HealthResult:
    """Compute the health score and classification.

    Args:
        status: Upstream deployment status (case-insensitive)
        cpu: CPU reading; fractions (<= 1) are treated as ratios
        memory: Memory reading; byte/kilobyte scale values are divided down to MB
        error_rate: Failed request percentage; 0.0 counts as a measurement
        variant: Deployment platform; Hybrid apps skip the memory check
        memory_limit_mb: Memory limit used for the memory percentage

    Returns:
        HealthResult with score in [0, 100].
    """
    normalized_status = (status or "").upper()
    score = HEALTH_SCORE_MAX - _status_penalty(normalized_status)

    cpu_pct = normalize_cpu_value(cpu)
    memory_mb = normalize_memory_value(memory)
    has_any_metrics = (
        cpu_pct is not None or memory_mb is not None or error_rate is not None
    )

    if normalized_status in RUNNING_FAMILY_STATUSES and not has_any_metrics:
        score -= MISSING_METRICS_PENALTY

    if cpu_pct is not None:
        score -= _usage_penalty(cpu_pct, CPU_CRITICAL_PCT, CPU_WARNING_PCT)

    if memory_mb is not None and variant is not PlatformVariant.HYBRID:
        limit = (
            memory_limit_mb
            if memory_limit_mb and memory_limit_mb > 0
            else MEMORY_LIMIT_MB_DEFAULT
        )
        memory_pct = memory_mb / limit * 100
        score -= _usage_penalty(memory_pct, MEMORY_CRITICAL_PCT, MEMORY_WARNING_PCT)

    if error_rate is not None:
        score -= _error_rate_penalty(error_rate)

    score = max(HEALTH_SCORE_MIN, min(HEALTH_SCORE_MAX, score))
    return HealthResult(score=score, status=classify_score(score))


def score_application(
    app: ApplicationSummary, metrics: ApplicationMetrics | None = None
) -> HealthResult:
    """Score an application and store the result on it in one step.

    Args:
        app: Application to score; its health fields are overwritten
        metrics: Telemetry to score with; defaults to ``app.metrics``
    """
    readings = metrics if metrics is not None else app.metrics
    result = calculate_health(
        app.status,
        readings.cpu,
        readings.memory,
        readings.error_rate,
        variant=app.platform_variant,
        memory_limit_mb=app.memory_limit_mb,
    )
    app.apply_health(result)
    return result
