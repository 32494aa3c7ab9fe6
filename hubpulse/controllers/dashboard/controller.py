"""Dashboard controller - orchestrates one aggregation run per refresh.

A run collects applications, scores them from status alone and returns a
snapshot right away. Metrics are loaded afterwards through ``load_metrics``,
which streams progress events tagged with the run's session id.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import Any

import httpx

from hubpulse.constants.enums import MetricsLoadingState
from hubpulse.controllers.applications import ApplicationsController
from hubpulse.controllers.base.platform_client import (
    PlatformClient,
    RequestFunc,
    SessionProvider,
    resolve_base_url,
)
from hubpulse.controllers.metrics import MetricsController
from hubpulse.controllers.metrics.controller import SleepFunc
from hubpulse.controllers.metrics.fetchers import DatasourceFetcher
from hubpulse.models.cache.datasource_cache import DatasourceCache
from hubpulse.models.core.application_summary import AppMetricsUpdate
from hubpulse.models.core.dashboard_summary import DashboardSnapshot, DashboardSummary
from hubpulse.models.events.metrics_events import (
    MetricsComplete,
    MetricsEvent,
    MetricsProgress,
    MetricsStarted,
)
from hubpulse.models.state.app_settings import AppSettings
from hubpulse.models.state.config_manager import ConfigManager
from hubpulse.models.state.errors import AggregationError
from hubpulse.scoring.health_calculator import score_application
from hubpulse.utils.logging_config import configure_logging

logger = logging.getLogger(__name__)


class DashboardController:
    """Long-lived entry point for the multi-app dashboard.

    Owns the HTTP client and the datasource cache, both of which outlive
    individual aggregation runs. Every call to ``begin_aggregation`` starts a
    new session; events from older sessions are rejected by ``apply_event``.
    """

    def __init__(
        self,
        session: SessionProvider,
        settings: AppSettings | None = None,
        *,
        request_func: RequestFunc | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: SleepFunc = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize dashboard controller.

        Args:
            session: Account context and access token source
            settings: Tunables; defaults are used if omitted
            request_func: Replaces the built-in HTTP client's ``get``
            transport: httpx transport for the built-in client
            sleep: Awaitable used for the pause between metrics batches
            clock: Monotonic clock used by the datasource cache
        """
        self.session = session
        self.settings = settings or AppSettings()
        region = (getattr(session, "region", None) or self.settings.region).lower()
        self.base_url = resolve_base_url(region, self.settings.base_url or None)

        self._client: PlatformClient | None = None
        if request_func is None:
            self._client = PlatformClient(
                session.access_token,
                base_url=self.base_url,
                timeout=self.settings.http_timeout_seconds,
                transport=transport,
            )
            request_func = self._client.get

        self.applications = ApplicationsController(
            request_func,
            region=region,
            memory_limit_default_mb=self.settings.memory_limit_default_mb,
        )
        self.datasource_cache = DatasourceCache(
            ttl_seconds=self.settings.datasource_cache_ttl_seconds, clock=clock
        )
        self.datasource_fetcher = DatasourceFetcher(
            request_func, self.base_url, cache=self.datasource_cache
        )
        self.metrics = MetricsController(
            request_func,
            self.datasource_fetcher,
            batch_size=self.settings.metrics_batch_size,
            batch_delay=self.settings.metrics_batch_delay_seconds,
            query_timeout=self.settings.metrics_query_timeout_seconds,
            range_minutes=self.settings.metrics_range_minutes,
            timezone=self.settings.metrics_timezone,
            sleep=sleep,
        )
        self._session_counter = 0

    @classmethod
    def from_config(
        cls, session: SessionProvider, config_path: str | Path | None = None, **kwargs: Any
    ) -> DashboardController:
        """Build a controller with settings loaded by ``ConfigManager``.

        The configured ``log_level`` is applied to the ``hubpulse`` logger.
        """
        settings = ConfigManager.load(config_path)
        configure_logging(settings.log_level)
        return cls(session, settings, **kwargs)

    @property
    def current_session_id(self) -> int:
        return self._session_counter

    def is_current(self, session_id: int) -> bool:
        """True if ``session_id`` belongs to the most recent aggregation run."""
        return session_id == self._session_counter

    async def begin_aggregation(
        self,
        environment_id: str | None,
        organization_id: str | None = None,
        environment_name: str | None = None,
    ) -> DashboardSnapshot:
        """Start a new aggregation run and return its status-only snapshot.

        Raises:
            AggregationError: If the organization or environment id is missing.
                Raised before any request is made.
        """
        org_id = organization_id or self.session.organization_id
        env_id = environment_id or getattr(self.session, "environment_id", None)
        if not org_id:
            raise AggregationError("No organization selected")
        if not env_id:
            raise AggregationError("No environment selected")

        self._session_counter += 1
        session_id = self._session_counter
        logger.info(
            "Starting aggregation session %d for org %s, env %s",
            session_id,
            org_id,
            env_id,
        )

        applications = await self.applications.fetch_all(env_id, org_id)
        for app in applications:
            score_application(app)

        snapshot = DashboardSnapshot(
            session_id=session_id,
            environment_id=env_id,
            environment_name=environment_name or env_id,
            organization_id=org_id,
            organization_name=getattr(self.session, "organization_name", "") or "",
            applications=applications,
            summary=DashboardSummary.from_applications(applications),
            last_refreshed=time.time(),
            source_states={
                name: status.to_dict()
                for name, status in self.applications.fetch_states.items()
            },
        )
        if self.applications.all_sources_failed():
            logger.warning("Every application source failed for session %d", session_id)
        return snapshot

    async def load_metrics(self, snapshot: DashboardSnapshot) -> AsyncIterator[MetricsEvent]:
        """Load metrics for a snapshot, yielding progress events.

        Work happens on copies of the snapshot's applications. Each event is
        merged into ``snapshot`` through ``apply_event`` before it is yielded,
        so a superseded snapshot is left untouched.
        """
        working = [app.model_copy(deep=True) for app in snapshot.applications]
        try:
            async for event in self.metrics.load_metrics(
                working,
                session_id=snapshot.session_id,
                environment_id=snapshot.environment_id,
                organization_id=snapshot.organization_id,
            ):
                self.apply_event(snapshot, event)
                yield event
        except Exception as exc:
            logger.exception("Metrics loading failed for session %d", snapshot.session_id)
            if self.is_current(snapshot.session_id):
                snapshot.metrics_loading_state = MetricsLoadingState.ERROR
                snapshot.metrics_error = str(exc)
            raise

    @staticmethod
    def _merge_updates(snapshot: DashboardSnapshot, updates: list[AppMetricsUpdate]) -> None:
        for update in updates:
            app = snapshot.find_application(update.id)
            if app is None:
                continue
            app.metrics = update.metrics.model_copy()
            app.metrics_error = update.metrics_error
            app.metrics_status = update.metrics_status
            app.health_score = update.health_score
            app.health_status = update.health_status

    def apply_event(self, snapshot: DashboardSnapshot, event: MetricsEvent) -> bool:
        """Merge a metrics event into a snapshot.

        Returns:
            False if the event belongs to another snapshot or to a session
            that has since been superseded; the snapshot is not modified.
        """
        if event.session_id != snapshot.session_id or not self.is_current(event.session_id):
            logger.debug(
                "Discarding stale %s for session %d", type(event).__name__, event.session_id
            )
            return False

        if isinstance(event, MetricsStarted):
            snapshot.metrics_loading_state = MetricsLoadingState.LOADING
            snapshot.metrics_error = None
        elif isinstance(event, MetricsProgress):
            self._merge_updates(snapshot, event.updated_apps)
            snapshot.refresh_summary()
        elif isinstance(event, MetricsComplete):
            self._merge_updates(snapshot, event.updated_apps)
            snapshot.refresh_summary()
            snapshot.metrics_error = event.metrics_error
            snapshot.metrics_loading_state = (
                MetricsLoadingState.ERROR if event.metrics_error else MetricsLoadingState.COMPLETE
            )
            snapshot.last_refreshed = time.time()
        return True

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    async def __aenter__(self) -> DashboardController:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
