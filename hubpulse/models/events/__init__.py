"""Metrics progress event models."""

from hubpulse.models.events.metrics_events import (
    MetricsComplete,
    MetricsEvent,
    MetricsProgress,
    MetricsStarted,
)

__all__ = ["MetricsComplete", "MetricsEvent", "MetricsProgress", "MetricsStarted"]
