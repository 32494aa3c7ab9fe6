"""Tests for Visualizer datasource resolution."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock

import pytest

from hubpulse.controllers.base.platform_client import ApiResponse
from hubpulse.controllers.metrics.fetchers.datasource_fetcher import DatasourceFetcher
from hubpulse.models.cache.datasource_cache import DatasourceCache

BASE_URL = "https://anypoint.mulesoft.com"


def _bootdata(*sources: dict[str, Any]) -> ApiResponse:
    return ApiResponse(
        200,
        {"Settings": {"datasources": {str(i): source for i, source in enumerate(sources)}}},
    )


INFLUX_SOURCE = {"type": "influxdb", "name": "influxdb", "id": 12, "database": '"metrics_db"'}


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now


class TestSelectInfluxSource:
    """Tests for datasource registry selection."""

    def test_prefers_entry_named_influxdb(self) -> None:
        sources = {
            "a": {"type": "influxdb", "name": "other", "id": 1},
            "b": {"type": "influxdb", "name": "InfluxDB", "id": 2},
        }
        assert DatasourceFetcher.select_influx_source(sources)["id"] == 2

    def test_falls_back_to_first_influx_entry(self) -> None:
        sources = [
            {"type": "prometheus", "name": "influxdb", "id": 1},
            {"meta": {"id": "influxdb", "name": "custom"}, "id": 3},
        ]
        assert DatasourceFetcher.select_influx_source(sources)["id"] == 3

    def test_no_influx_entry(self) -> None:
        assert DatasourceFetcher.select_influx_source({"a": {"type": "graphite"}}) is None
        assert DatasourceFetcher.select_influx_source("nonsense") is None


class TestDatasourceFetcher:
    """Tests for DatasourceFetcher.resolve."""

    @pytest.fixture
    def clock(self) -> FakeClock:
        return FakeClock()

    @pytest.fixture
    def mock_request(self) -> AsyncMock:
        return AsyncMock(return_value=_bootdata(INFLUX_SOURCE))

    @pytest.fixture
    def fetcher(self, mock_request: AsyncMock, clock: FakeClock) -> DatasourceFetcher:
        return DatasourceFetcher(
            mock_request, BASE_URL + "/", cache=DatasourceCache(ttl_seconds=300, clock=clock)
        )

    @pytest.mark.asyncio
    async def test_resolve_parses_datasource(
        self, fetcher: DatasourceFetcher, mock_request: AsyncMock, clock: FakeClock
    ) -> None:
        datasource = await fetcher.resolve()

        assert datasource is not None
        assert datasource.id == 12
        assert datasource.database == "metrics_db"
        assert datasource.base_url == BASE_URL
        assert datasource.fetched_at == clock.now
        mock_request.assert_awaited_once_with("/monitoring/api/visualizer/api/bootdata")

    @pytest.mark.asyncio
    async def test_resolve_within_ttl_uses_cache(
        self, fetcher: DatasourceFetcher, mock_request: AsyncMock, clock: FakeClock
    ) -> None:
        first = await fetcher.resolve()
        clock.now += 299
        second = await fetcher.resolve()

        assert first is second
        assert mock_request.await_count == 1

    @pytest.mark.asyncio
    async def test_resolve_after_ttl_fetches_again(
        self, fetcher: DatasourceFetcher, mock_request: AsyncMock, clock: FakeClock
    ) -> None:
        await fetcher.resolve()
        clock.now += 300
        refreshed = await fetcher.resolve()

        assert mock_request.await_count == 2
        assert refreshed is not None
        assert refreshed.fetched_at == clock.now

    @pytest.mark.asyncio
    async def test_concurrent_resolution_shares_one_fetch(
        self, mock_request: AsyncMock, clock: FakeClock
    ) -> None:
        """Concurrent callers wait for the first fetch instead of issuing their own."""

        async def slow_bootdata(path: str) -> ApiResponse:
            await asyncio.sleep(0.01)
            return _bootdata(INFLUX_SOURCE)

        mock_request.side_effect = slow_bootdata
        fetcher = DatasourceFetcher(
            mock_request, BASE_URL, cache=DatasourceCache(clock=clock)
        )

        results = await asyncio.gather(*(fetcher.resolve() for _ in range(5)))

        assert mock_request.await_count == 1
        assert all(result is results[0] for result in results)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            ApiResponse(500),
            ApiResponse(200, {"Settings": {}}),
            _bootdata({"type": "graphite", "id": 1}),
            _bootdata({"type": "influxdb", "id": 0, "database": "db"}),
            _bootdata({"type": "influxdb", "id": 4}),
        ],
    )
    async def test_resolve_returns_none_when_unusable(
        self, fetcher: DatasourceFetcher, mock_request: AsyncMock, response: ApiResponse
    ) -> None:
        mock_request.return_value = response

        assert await fetcher.resolve() is None
        assert fetcher.cache.get() is None

    @pytest.mark.asyncio
    async def test_resolve_swallows_transport_errors(
        self, fetcher: DatasourceFetcher, mock_request: AsyncMock
    ) -> None:
        mock_request.side_effect = OSError("network down")

        assert await fetcher.resolve() is None

    @pytest.mark.asyncio
    async def test_failed_resolution_is_retried(
        self, fetcher: DatasourceFetcher, mock_request: AsyncMock
    ) -> None:
        mock_request.return_value = ApiResponse(503)
        assert await fetcher.resolve() is None

        mock_request.return_value = _bootdata(INFLUX_SOURCE)
        assert await fetcher.resolve() is not None
        assert mock_request.await_count == 2

    @pytest.mark.asyncio
    async def test_id_and_database_from_nested_fields(
        self, fetcher: DatasourceFetcher, mock_request: AsyncMock
    ) -> None:
        mock_request.return_value = _bootdata(
            {
                "meta": {"id": "influxdb", "datasourceId": "7"},
                "jsonData": {"database": "visualizer"},
            }
        )

        datasource = await fetcher.resolve()

        assert datasource is not None
        assert datasource.id == 7
        assert datasource.database == "visualizer"
