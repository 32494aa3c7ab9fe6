"""Error taxonomy for aggregation runs.

Only AggregationError propagates to callers. The remaining conditions are
recovered where they occur and surface as data-quality attributes
(fewer applications, ``metrics_error`` strings, missing metric values).
"""

from __future__ import annotations


class HubPulseError(Exception):
    """Base exception for HubPulse."""


class AggregationError(HubPulseError):
    """Required identifiers are missing; the run cannot start."""


class SourceUnavailableError(HubPulseError):
    """A deployment listing source failed."""

    def __init__(self, source: str, reason: str, status_code: int | None = None) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason
        self.status_code = status_code


class MetricQueryError(HubPulseError):
    """A telemetry query failed with an HTTP or parse error."""

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code
