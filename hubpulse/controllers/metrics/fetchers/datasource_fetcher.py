"""Datasource fetcher - resolves the Visualizer InfluxDB datasource."""

from __future__ import annotations

import logging
from contextlib import suppress
from typing import Any

from hubpulse.constants.values import (
    INFLUXDB_DATASOURCE_NAME,
    INFLUXDB_DATASOURCE_TYPE,
    VISUALIZER_BOOTDATA_PATH,
)
from hubpulse.controllers.base.platform_client import RequestFunc
from hubpulse.models.cache.datasource_cache import DatasourceCache, VisualizerDatasource
from hubpulse.utils.resource_parser import get_nested

logger = logging.getLogger(__name__)


class DatasourceFetcher:
    """Resolves and caches the Visualizer datasource coordinates.

    ``resolve()`` never raises: None means no telemetry can be queried for
    this run.
    """

    def __init__(
        self,
        request_func: RequestFunc,
        base_url: str,
        cache: DatasourceCache | None = None,
    ) -> None:
        """Initialize datasource fetcher.

        Args:
            request_func: Async function issuing GET requests, returning ApiResponse
            base_url: Control plane base URL recorded on resolved datasources
            cache: Cache shared across runs; a private one is created if omitted
        """
        self._request = request_func
        self._base_url = base_url.rstrip("/")
        self.cache = cache or DatasourceCache()

    @staticmethod
    def _is_influx_source(source: Any) -> bool:
        if not isinstance(source, dict):
            return False
        return (
            source.get("type") == INFLUXDB_DATASOURCE_TYPE
            or get_nested(source, "meta", "id") == INFLUXDB_DATASOURCE_TYPE
        )

    @staticmethod
    def _display_name(source: dict[str, Any]) -> str:
        name = source.get("name") or get_nested(source, "meta", "name") or ""
        return str(name).lower()

    @classmethod
    def select_influx_source(cls, datasources: Any) -> dict[str, Any] | None:
        """Pick the InfluxDB entry from the bootdata datasource registry.

        Prefers the entry named "influxdb"; otherwise the first InfluxDB entry.
        """
        if isinstance(datasources, dict):
            entries = list(datasources.values())
        elif isinstance(datasources, list):
            entries = datasources
        else:
            return None

        candidates = [source for source in entries if cls._is_influx_source(source)]
        for source in candidates:
            if cls._display_name(source) == INFLUXDB_DATASOURCE_NAME:
                return source
        return candidates[0] if candidates else None

    @staticmethod
    def _parse_datasource_id(source: dict[str, Any]) -> int | None:
        for candidate in (
            source.get("id"),
            get_nested(source, "meta", "datasourceId"),
            get_nested(source, "meta", "id"),
        ):
            if isinstance(candidate, bool) or not candidate:
                continue
            with suppress(TypeError, ValueError, OverflowError):
                parsed = int(float(candidate))
                if parsed > 0:
                    return parsed
        return None

    @staticmethod
    def _parse_database(source: dict[str, Any]) -> str | None:
        raw = source.get("database") or get_nested(source, "jsonData", "database")
        if not isinstance(raw, str):
            return None
        return raw.replace('"', "").strip() or None

    async def _fetch_datasource(self) -> VisualizerDatasource | None:
        try:
            response = await self._request(VISUALIZER_BOOTDATA_PATH)
        except Exception as exc:
            logger.warning("Failed to get Visualizer datasource: %s", exc)
            return None

        if not response.ok:
            logger.warning("Visualizer bootdata returned HTTP %s", response.status_code)
            return None

        datasources = get_nested(response.data, "Settings", "datasources")
        if not datasources:
            logger.warning("No datasources returned from monitoring boot endpoint")
            return None

        source = self.select_influx_source(datasources)
        if source is None:
            logger.warning("InfluxDB datasource not configured")
            return None

        datasource_id = self._parse_datasource_id(source)
        database = self._parse_database(source)
        if datasource_id is None or database is None:
            logger.warning("Incomplete datasource metadata")
            return None

        logger.debug(
            "Cached Visualizer datasource id=%s database=%s", datasource_id, database
        )
        return VisualizerDatasource(
            id=datasource_id,
            database=database,
            base_url=self._base_url,
            fetched_at=self.cache.now(),
        )

    async def resolve(self) -> VisualizerDatasource | None:
        """Return the cached datasource or resolve a fresh one.

        Concurrent callers wait on the cache lock and reuse the entry stored
        by whichever caller fetched first.
        """
        cached = self.cache.get()
        if cached is not None:
            return cached

        async with self.cache.lock:
            cached = self.cache.get()
            if cached is not None:
                return cached
            datasource = await self._fetch_datasource()
            if datasource is not None:
                self.cache.set(datasource)
            return datasource
