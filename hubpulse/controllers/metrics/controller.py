"""Metrics controller - batched, rate-limited telemetry loading.

Applications are processed in fixed-size batches. Batches run one after
another with a pause in between; applications inside a batch are queried
concurrently. Each finished batch is re-scored and reported as a
``MetricsProgress`` event.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence

from hubpulse.constants.defaults import METRICS_TIMEZONE_DEFAULT
from hubpulse.constants.limits import METRICS_BATCH_SIZE, METRICS_RANGE_MINUTES
from hubpulse.constants.timeouts import METRICS_BATCH_DELAY, METRICS_QUERY_TIMEOUT
from hubpulse.constants.values import (
    METRICS_REQUEST_FAILED_REASON,
    METRICS_UNAVAILABLE_REASON,
)
from hubpulse.controllers.base.platform_client import RequestFunc
from hubpulse.controllers.metrics.fetchers import (
    AppMetricsResult,
    DatasourceFetcher,
    MetricFetcher,
)
from hubpulse.models.core.application_summary import (
    ApplicationMetrics,
    ApplicationSummary,
    AppMetricsUpdate,
)
from hubpulse.models.core.dashboard_summary import DashboardSummary
from hubpulse.models.events.metrics_events import (
    MetricsComplete,
    MetricsEvent,
    MetricsProgress,
    MetricsStarted,
)
from hubpulse.scoring.health_calculator import score_application

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


def chunk(items: Sequence[ApplicationSummary], size: int) -> list[list[ApplicationSummary]]:
    """Split items into consecutive batches of at most ``size`` elements."""
    if size < 1:
        raise ValueError(f"batch size must be positive, got {size}")
    return [list(items[start : start + size]) for start in range(0, len(items), size)]


class MetricsController:
    """Loads Visualizer metrics for a set of applications and re-scores them."""

    def __init__(
        self,
        request_func: RequestFunc,
        datasource_fetcher: DatasourceFetcher,
        *,
        batch_size: int = METRICS_BATCH_SIZE,
        batch_delay: float = METRICS_BATCH_DELAY,
        query_timeout: float = METRICS_QUERY_TIMEOUT,
        range_minutes: int = METRICS_RANGE_MINUTES,
        timezone: str = METRICS_TIMEZONE_DEFAULT,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._request = request_func
        self.datasource_fetcher = datasource_fetcher
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.query_timeout = query_timeout
        self.range_minutes = range_minutes
        self.timezone = timezone
        self._sleep = sleep

    @staticmethod
    def select_targets(applications: Sequence[ApplicationSummary]) -> list[ApplicationSummary]:
        """Applications that can have Visualizer telemetry."""
        return [app for app in applications if app.has_telemetry]

    @staticmethod
    def _apply_result(app: ApplicationSummary, result: AppMetricsResult | BaseException) -> None:
        if isinstance(result, BaseException):
            logger.warning("Metrics request failed for %s: %s", app.name, result)
            app.metrics = ApplicationMetrics()
            app.metrics_error = METRICS_REQUEST_FAILED_REASON
            app.metrics_status = None
        else:
            app.metrics = result.metrics
            app.metrics_error = result.error
            app.metrics_status = result.status_code
        score_application(app)

    async def load_metrics(
        self,
        applications: Sequence[ApplicationSummary],
        *,
        session_id: int,
        environment_id: str,
        organization_id: str,
    ) -> AsyncIterator[MetricsEvent]:
        """Fetch metrics batch by batch, yielding progress events.

        Applications are updated in place. The final event always carries a
        summary recomputed from the full application set.

        Args:
            applications: Every application of the snapshot; Hybrid apps are skipped
            session_id: Aggregation run the events belong to
            environment_id: Environment the apps are deployed in
            organization_id: Organization owning the environment
        """
        targets = self.select_targets(applications)
        if not targets:
            yield MetricsComplete(
                session_id=session_id,
                summary=DashboardSummary.from_applications(applications),
            )
            return

        total = len(targets)
        yield MetricsStarted(session_id=session_id, total=total)

        datasource = await self.datasource_fetcher.resolve()
        if datasource is None:
            logger.warning(
                "Visualizer datasource unavailable; skipping metrics for %d apps", total
            )
            for app in targets:
                app.metrics_error = METRICS_UNAVAILABLE_REASON
                app.metrics_status = None
                score_application(app)
            yield MetricsComplete(
                session_id=session_id,
                summary=DashboardSummary.from_applications(applications),
                metrics_error=METRICS_UNAVAILABLE_REASON,
                updated_apps=[AppMetricsUpdate.from_application(app) for app in targets],
            )
            return

        fetcher = MetricFetcher(
            self._request,
            datasource,
            organization_id,
            environment_id,
            timezone=self.timezone,
            range_minutes=self.range_minutes,
            query_timeout=self.query_timeout,
        )

        batches = chunk(targets, self.batch_size)
        completed = 0
        for index, batch in enumerate(batches):
            results = await asyncio.gather(
                *(fetcher.fetch_app_metrics(app) for app in batch),
                return_exceptions=True,
            )
            for app, result in zip(batch, results):
                if isinstance(result, asyncio.CancelledError):
                    raise result
                self._apply_result(app, result)

            completed += len(batch)
            logger.debug(
                "Metrics batch %d/%d done (%d/%d apps)",
                index + 1,
                len(batches),
                completed,
                total,
            )
            yield MetricsProgress(
                session_id=session_id,
                completed=completed,
                total=total,
                updated_apps=[AppMetricsUpdate.from_application(app) for app in batch],
            )

            if index < len(batches) - 1:
                await self._sleep(self.batch_delay)

        yield MetricsComplete(
            session_id=session_id,
            summary=DashboardSummary.from_applications(applications),
        )
