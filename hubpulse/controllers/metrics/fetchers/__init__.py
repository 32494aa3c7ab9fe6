"""Fetchers for Visualizer datasource resolution and telemetry queries."""

from hubpulse.controllers.metrics.fetchers.datasource_fetcher import DatasourceFetcher
from hubpulse.controllers.metrics.fetchers.metric_fetcher import (
    AppMetricsResult,
    MetricFetcher,
    MetricResult,
    derive_app_identifier,
)

__all__ = [
    "AppMetricsResult",
    "DatasourceFetcher",
    "MetricFetcher",
    "MetricResult",
    "derive_app_identifier",
]
