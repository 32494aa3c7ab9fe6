"""Application controller - concurrent discovery across deployment planes.

Queries the CH1, CH2 and Hybrid listings in parallel. A failing source is
logged and recorded in ``fetch_states``; it never aborts the others.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any

from hubpulse.constants.defaults import MEMORY_LIMIT_MB_DEFAULT
from hubpulse.constants.enums import FetchSources, FetchState, PlatformVariant, Region
from hubpulse.controllers.applications.fetchers import ApplicationFetcher
from hubpulse.controllers.applications.parsers import ApplicationParser
from hubpulse.controllers.base import BaseController
from hubpulse.controllers.base.platform_client import RequestFunc
from hubpulse.models.core.application_summary import ApplicationSummary
from hubpulse.models.state.errors import SourceUnavailableError

logger = logging.getLogger(__name__)


class ApplicationsController(BaseController):
    """Collects and normalizes applications from every deployment plane."""

    _SOURCE_VARIANTS: tuple[tuple[FetchSources, PlatformVariant], ...] = (
        (FetchSources.CLOUDHUB_1, PlatformVariant.CLOUDHUB_1),
        (FetchSources.CLOUDHUB_2, PlatformVariant.CLOUDHUB_2),
        (FetchSources.HYBRID, PlatformVariant.HYBRID),
    )

    def __init__(
        self,
        request_func: RequestFunc,
        region: str = Region.US.value,
        memory_limit_default_mb: int = MEMORY_LIMIT_MB_DEFAULT,
    ) -> None:
        super().__init__()
        self._fetcher = ApplicationFetcher(request_func, region=region)
        self._parser = ApplicationParser(memory_limit_default_mb=memory_limit_default_mb)

    def _source_calls(
        self, environment_id: str, organization_id: str
    ) -> list[Callable[[], Awaitable[list[dict[str, Any]]]]]:
        return [
            lambda: self._fetcher.fetch_cloudhub1(environment_id, organization_id),
            lambda: self._fetcher.fetch_cloudhub2(environment_id, organization_id),
            lambda: self._fetcher.fetch_hybrid(environment_id, organization_id),
        ]

    def _normalize_records(
        self,
        source: FetchSources,
        variant: PlatformVariant,
        records: list[dict[str, Any]],
    ) -> list[ApplicationSummary]:
        applications: list[ApplicationSummary] = []
        for record in records:
            try:
                applications.append(self._parser.parse(variant, record))
            except (TypeError, ValueError):
                logger.exception("Skipping unparseable %s record", source.value)
        return applications

    async def fetch_all(
        self, environment_id: str, organization_id: str
    ) -> list[ApplicationSummary]:
        """Fetch and normalize applications from all three sources.

        Never raises. Returns the applications of every source that succeeded
        (possibly none); inspect ``fetch_states`` or ``all_sources_failed()``
        to detect which sources failed.
        """
        logger.info(
            "Fetching applications for org %s, env %s", organization_id, environment_id
        )
        self._fetch_states.clear()
        results = await asyncio.gather(
            *(call() for call in self._source_calls(environment_id, organization_id)),
            return_exceptions=True,
        )

        applications: list[ApplicationSummary] = []
        now = datetime.now(timezone.utc)
        for (source, variant), result in zip(self._SOURCE_VARIANTS, results):
            if isinstance(result, BaseException):
                if isinstance(result, asyncio.CancelledError):
                    raise result
                reason = (
                    result.reason
                    if isinstance(result, SourceUnavailableError)
                    else f"{type(result).__name__}: {result}"
                )
                logger.warning("%s fetch failed: %s", source.value, reason)
                self._record_fetch(
                    source.value,
                    FetchState.ERROR,
                    error_message=reason,
                    last_updated=now,
                )
                continue

            normalized = self._normalize_records(source, variant, result)
            logger.info("Found %d %s applications", len(normalized), variant.value)
            self._record_fetch(
                source.value,
                FetchState.SUCCESS,
                item_count=len(normalized),
                last_updated=now,
            )
            applications.extend(normalized)

        logger.info("Total applications found: %d", len(applications))
        return applications
