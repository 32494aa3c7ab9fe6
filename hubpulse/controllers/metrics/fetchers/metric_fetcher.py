"""Metric fetcher - Visualizer (InfluxQL) telemetry queries for one application."""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass, field
from typing import Any

from hubpulse.constants.defaults import (
    CH1_REGION_DEFAULT,
    METRICS_TIMEZONE_DEFAULT,
    NOT_AVAILABLE,
)
from hubpulse.constants.enums import MetricOutcome, PlatformVariant
from hubpulse.constants.limits import METRICS_RANGE_MINUTES
from hubpulse.constants.timeouts import METRICS_QUERY_TIMEOUT
from hubpulse.constants.values import (
    CLOUDHUB_DOMAIN_SUFFIX,
    CPU_FIELD,
    CPU_MEASUREMENT,
    CPU_SCALE,
    FAILED_RESPONSE_TYPE,
    MEMORY_FIELD,
    MEMORY_MEASUREMENT,
    MEMORY_SCALE,
    NO_METRICS_DATA_REASON,
    REQUESTS_FIELD,
    REQUESTS_MEASUREMENT,
    VISUALIZER_QUERY_PATH,
)
from hubpulse.controllers.base.platform_client import RequestFunc
from hubpulse.models.cache.datasource_cache import VisualizerDatasource
from hubpulse.models.core.application_summary import ApplicationMetrics, ApplicationSummary
from hubpulse.models.state.errors import MetricQueryError
from hubpulse.utils.resource_parser import first_present, get_nested, round_half_up

logger = logging.getLogger(__name__)


@dataclass
class MetricResult:
    """Outcome of one telemetry query."""

    outcome: MetricOutcome
    value: float | None = None
    reason: str | None = None
    status_code: int | None = None

    @property
    def failed(self) -> bool:
        return self.outcome in (MetricOutcome.TIMEOUT, MetricOutcome.QUERY_ERROR)


@dataclass
class AppMetricsResult:
    """Combined CPU/memory/error-rate result for one application."""

    app_id: str
    metrics: ApplicationMetrics = field(default_factory=ApplicationMetrics)
    error: str | None = None
    status_code: int | None = None

    @property
    def success(self) -> bool:
        return self.metrics.has_any


def derive_app_identifier(app: ApplicationSummary) -> str:
    """Return the ``app_id`` tag Visualizer uses for an application.

    CH1 apps are tagged with their full CloudHub domain; CH2 apps with their
    name.
    """
    if app.platform_variant is PlatformVariant.CLOUDHUB_1:
        domain = app.domain or app.name
        if f".{CLOUDHUB_DOMAIN_SUFFIX}" in domain:
            return domain.lower()
        raw = app.raw_data
        full_domain = first_present(
            get_nested(raw, "fullDomain"),
            get_nested(raw, "fullDomains", 0),
            get_nested(raw, "dnsInfo", "fullDomain"),
        )
        if isinstance(full_domain, str):
            return full_domain.lower()
        region = first_present(
            get_nested(raw, "region"),
            app.region if app.region != NOT_AVAILABLE else None,
        ) or CH1_REGION_DEFAULT
        return f"{domain}.{region}.{CLOUDHUB_DOMAIN_SUFFIX}".lower()

    return (app.name or app.domain).lower()


def _quote_literal(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


class MetricFetcher:
    """Runs CPU, memory and error-rate queries against one Visualizer datasource.

    Every query is bounded by its own timeout. A timeout or failure only
    affects the metric it belongs to.
    """

    def __init__(
        self,
        request_func: RequestFunc,
        datasource: VisualizerDatasource,
        organization_id: str,
        environment_id: str,
        *,
        timezone: str = METRICS_TIMEZONE_DEFAULT,
        range_minutes: int = METRICS_RANGE_MINUTES,
        query_timeout: float = METRICS_QUERY_TIMEOUT,
    ) -> None:
        self._request = request_func
        self.datasource = datasource
        self.organization_id = organization_id
        self.environment_id = environment_id
        self.timezone = timezone
        self.range_minutes = range_minutes
        self.query_timeout = query_timeout

    def build_condition(self, app_identifier: str) -> str:
        return (
            f"(\"org_id\" = '{_quote_literal(self.organization_id)}'"
            f" AND \"env_id\" = '{_quote_literal(self.environment_id)}'"
            f" AND \"app_id\" = '{_quote_literal(app_identifier)}')"
        )

    def _window_clause(self, fill: str) -> str:
        return (
            f"time >= now() - {self.range_minutes}m"
            f" GROUP BY time(1m) fill({fill}) tz('{_quote_literal(self.timezone)}')"
        )

    def build_mean_query(self, measurement: str, field_name: str, condition: str) -> str:
        return (
            f'SELECT mean("{field_name}") FROM "{measurement}"'
            f" WHERE {condition} AND {self._window_clause('none')}"
        )

    def build_request_count_query(self, condition: str, *, failed_only: bool) -> str:
        response_filter = (
            f" AND \"response_type\" = '{FAILED_RESPONSE_TYPE}'" if failed_only else ""
        )
        return (
            f'SELECT sum("{REQUESTS_FIELD}") FROM "{REQUESTS_MEASUREMENT}"'
            f" WHERE {condition}{response_filter} AND {self._window_clause('0')}"
        )

    @staticmethod
    def extract_values(data: Any) -> list[Any]:
        """Return the value column of the first series, or an empty list."""
        rows = get_nested(data, "results", 0, "series", 0, "values")
        if not isinstance(rows, list):
            return []
        return [
            row[1] for row in rows if isinstance(row, (list, tuple)) and len(row) > 1
        ]

    @staticmethod
    def _is_number(value: Any) -> bool:
        return (
            isinstance(value, (int, float))
            and not isinstance(value, bool)
            and math.isfinite(value)
        )

    async def _query_values(self, query: str) -> list[Any]:
        """Run one InfluxQL query and return its bucket values.

        Raises:
            MetricQueryError: On non-200 status or transport failure.
            asyncio.TimeoutError: When the query exceeds its deadline.
        """
        url = self.datasource.base_url + VISUALIZER_QUERY_PATH.format(
            datasource_id=self.datasource.id
        )
        params = {"db": f'"{self.datasource.database}"', "q": query, "epoch": "ms"}
        try:
            response = await asyncio.wait_for(
                self._request(url, params=params), timeout=self.query_timeout
            )
        except asyncio.TimeoutError:
            raise
        except Exception as exc:
            raise MetricQueryError(f"{type(exc).__name__}: {exc}") from exc

        if not response.ok:
            raise MetricQueryError(
                f"HTTP {response.status_code}", status_code=response.status_code
            )
        return self.extract_values(response.data)

    async def _guarded(self, query: str) -> tuple[list[Any] | None, MetricResult | None]:
        """Run a query, converting timeouts and failures into a MetricResult."""
        try:
            return await self._query_values(query), None
        except asyncio.TimeoutError:
            return None, MetricResult(MetricOutcome.TIMEOUT, reason="timeout")
        except MetricQueryError as exc:
            return None, MetricResult(
                MetricOutcome.QUERY_ERROR, reason=exc.reason, status_code=exc.status_code
            )

    async def fetch_latest(
        self, measurement: str, field_name: str, condition: str, scale: float
    ) -> MetricResult:
        """Most recent non-null bucket of ``mean(field)``, multiplied by scale."""
        values, failure = await self._guarded(
            self.build_mean_query(measurement, field_name, condition)
        )
        if failure is not None:
            return failure
        for value in reversed(values or []):
            if self._is_number(value):
                return MetricResult(MetricOutcome.OK, value=value * scale)
        return MetricResult(MetricOutcome.NO_DATA)

    async def fetch_request_count(self, condition: str, *, failed_only: bool) -> MetricResult:
        """Sum of request counts over every bucket in the window."""
        values, failure = await self._guarded(
            self.build_request_count_query(condition, failed_only=failed_only)
        )
        if failure is not None:
            return failure
        total = sum(value for value in values or [] if self._is_number(value))
        return MetricResult(MetricOutcome.OK, value=float(total))

    async def fetch_error_rate(self, condition: str) -> MetricResult:
        """Failed requests as a percentage of all requests.

        Zero traffic is reported as a 0.0 error rate, not as missing data.
        """
        total_result, failed_result = await asyncio.gather(
            self.fetch_request_count(condition, failed_only=False),
            self.fetch_request_count(condition, failed_only=True),
        )
        for result in (total_result, failed_result):
            if result.failed:
                return result

        total = total_result.value or 0.0
        failed = failed_result.value or 0.0
        if total <= 0:
            return MetricResult(MetricOutcome.OK, value=0.0)
        return MetricResult(
            MetricOutcome.OK, value=round_half_up(failed / total * 100 * 100) / 100
        )

    async def fetch_app_metrics(self, app: ApplicationSummary) -> AppMetricsResult:
        """Fetch CPU, memory and error rate for one application concurrently."""
        app_identifier = derive_app_identifier(app)
        condition = self.build_condition(app_identifier)
        logger.debug(
            "Fetching Visualizer metrics for %s (%s, app_id=%s)",
            app.name,
            app.platform_variant.value,
            app_identifier,
        )

        cpu_result, memory_result, error_rate_result = await asyncio.gather(
            self.fetch_latest(CPU_MEASUREMENT, CPU_FIELD, condition, CPU_SCALE),
            self.fetch_latest(MEMORY_MEASUREMENT, MEMORY_FIELD, condition, MEMORY_SCALE),
            self.fetch_error_rate(condition),
        )

        metrics = ApplicationMetrics()
        if cpu_result.value is not None:
            metrics.cpu = max(0.0, min(100.0, cpu_result.value))
        if memory_result.value is not None:
            metrics.memory = float(round_half_up(memory_result.value))
        if error_rate_result.value is not None:
            metrics.error_rate = error_rate_result.value

        result = AppMetricsResult(app_id=app.id, metrics=metrics)
        if not metrics.has_any:
            failures = [
                (name, outcome)
                for name, outcome in (
                    ("cpu", cpu_result),
                    ("memory", memory_result),
                    ("error_rate", error_rate_result),
                )
                if outcome.failed
            ]
            if failures:
                name, first_failure = failures[0]
                result.error = f"{NO_METRICS_DATA_REASON} ({name}: {first_failure.reason})"
                result.status_code = first_failure.status_code
            else:
                result.error = NO_METRICS_DATA_REASON

        logger.debug(
            "Visualizer metrics for %s: %s (has_metrics=%s)",
            app.name,
            metrics.model_dump(),
            metrics.has_any,
        )
        return result
