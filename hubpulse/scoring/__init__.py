"""Health scoring for applications."""

from hubpulse.scoring.health_calculator import (
    HealthResult,
    calculate_health,
    classify_score,
    score_application,
)

__all__ = ["HealthResult", "calculate_health", "classify_score", "score_application"]
