"""Tests for Visualizer metric queries."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock

import pytest

from hubpulse.constants.enums import MetricOutcome, PlatformVariant
from hubpulse.controllers.base.platform_client import ApiResponse
from hubpulse.controllers.metrics.fetchers.metric_fetcher import (
    MetricFetcher,
    derive_app_identifier,
)
from hubpulse.models.cache.datasource_cache import VisualizerDatasource
from hubpulse.models.core.application_summary import ApplicationSummary

BASE_URL = "https://anypoint.mulesoft.com"
DATASOURCE = VisualizerDatasource(id=12, database="metrics_db", base_url=BASE_URL, fetched_at=0.0)


def series(*values: Any) -> ApiResponse:
    """Influx response with one series of (timestamp, value) rows."""
    rows = [[1700000000000 + i * 60000, value] for i, value in enumerate(values)]
    return ApiResponse(200, {"results": [{"series": [{"values": rows}]}]})


def routed(
    cpu: Any = None, memory: Any = None, total: Any = None, failed: Any = None
):
    """Request function answering each metric query with its own response."""

    async def request(url: str, **kwargs: Any) -> ApiResponse:
        query = kwargs["params"]["q"]
        if '"jvm.cpu.operatingsystem"' in query:
            response = cpu
        elif '"jvm.memory"' in query:
            response = memory
        elif "response_type" in query:
            response = failed
        else:
            response = total
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return await response()
        return response if response is not None else ApiResponse(200, {"results": [{}]})

    return request


def _app(name: str = "Orders-API", variant: PlatformVariant = PlatformVariant.CLOUDHUB_2,
         **fields: Any) -> ApplicationSummary:
    return ApplicationSummary(
        id=name, name=name, domain=fields.pop("domain", name),
        platform_variant=variant, status="RUNNING", **fields,
    )


class TestDeriveAppIdentifier:
    """Tests for the Visualizer app_id derivation."""

    def test_cloudhub2_uses_lowercased_name(self) -> None:
        assert derive_app_identifier(_app("Orders-API")) == "orders-api"

    def test_cloudhub1_full_domain_kept(self) -> None:
        app = _app("orders", PlatformVariant.CLOUDHUB_1, domain="Orders.us-e2.cloudhub.io")
        assert derive_app_identifier(app) == "orders.us-e2.cloudhub.io"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ({"fullDomain": "orders.eu-w1.cloudhub.io"}, "orders.eu-w1.cloudhub.io"),
            ({"fullDomains": ["Orders.us-w2.cloudhub.io"]}, "orders.us-w2.cloudhub.io"),
            ({"dnsInfo": {"fullDomain": "orders.de-c1.cloudhub.io"}}, "orders.de-c1.cloudhub.io"),
            ({"region": "us-e2"}, "orders.us-e2.cloudhub.io"),
            ({}, "orders.us-e1.cloudhub.io"),
        ],
    )
    def test_cloudhub1_fallbacks(self, raw: dict[str, Any], expected: str) -> None:
        app = _app("orders", PlatformVariant.CLOUDHUB_1, raw_data=raw)
        assert derive_app_identifier(app) == expected

    def test_cloudhub1_application_region(self) -> None:
        app = _app("orders", PlatformVariant.CLOUDHUB_1, region="eu-c1")
        assert derive_app_identifier(app) == "orders.eu-c1.cloudhub.io"


class TestMetricFetcherQueries:
    """Tests for query construction."""

    @pytest.fixture
    def fetcher(self) -> MetricFetcher:
        return MetricFetcher(AsyncMock(), DATASOURCE, "org-1", "env-'1", timezone="Europe/Paris")

    def test_condition_escapes_quotes(self, fetcher: MetricFetcher) -> None:
        condition = fetcher.build_condition("orders")
        assert condition == (
            "(\"org_id\" = 'org-1' AND \"env_id\" = 'env-\\'1' AND \"app_id\" = 'orders')"
        )

    def test_mean_query_shape(self, fetcher: MetricFetcher) -> None:
        query = fetcher.build_mean_query("jvm.memory", "heap_used", "(c)")
        assert query == (
            'SELECT mean("heap_used") FROM "jvm.memory" WHERE (c) AND '
            "time >= now() - 15m GROUP BY time(1m) fill(none) tz('Europe/Paris')"
        )

    def test_failed_request_query_filters_response_type(self, fetcher: MetricFetcher) -> None:
        query = fetcher.build_request_count_query("(c)", failed_only=True)
        assert "\"response_type\" = 'FAILED'" in query
        assert "fill(0)" in query
        assert query.startswith('SELECT sum("avg_request_count") FROM "app_inbound_metric"')

    @pytest.mark.asyncio
    async def test_query_url_and_params(self) -> None:
        mock_request = AsyncMock(return_value=series(0.5))
        fetcher = MetricFetcher(mock_request, DATASOURCE, "org-1", "env-1")

        await fetcher.fetch_latest("jvm.cpu.operatingsystem", "cpu", "(c)", 100.0)

        args, kwargs = mock_request.call_args
        assert args == (
            f"{BASE_URL}/monitoring/api/visualizer/api/datasources/proxy/12/query",
        )
        assert kwargs["params"]["db"] == '"metrics_db"'
        assert kwargs["params"]["epoch"] == "ms"


class TestMetricFetcherResults:
    """Tests for metric extraction and failure handling."""

    @pytest.mark.asyncio
    async def test_latest_non_null_bucket_is_used(self) -> None:
        fetcher = MetricFetcher(AsyncMock(return_value=series(0.1, 0.3, None)),
                                DATASOURCE, "org-1", "env-1")
        result = await fetcher.fetch_latest("m", "f", "(c)", 100.0)
        assert result.outcome is MetricOutcome.OK
        assert result.value == pytest.approx(30.0)

    @pytest.mark.asyncio
    async def test_empty_series_is_no_data(self) -> None:
        fetcher = MetricFetcher(AsyncMock(return_value=ApiResponse(200, {"results": [{}]})),
                                DATASOURCE, "org-1", "env-1")
        result = await fetcher.fetch_latest("m", "f", "(c)", 1.0)
        assert result.outcome is MetricOutcome.NO_DATA
        assert result.value is None

    @pytest.mark.asyncio
    async def test_http_error_is_recorded(self) -> None:
        fetcher = MetricFetcher(AsyncMock(return_value=ApiResponse(502)),
                                DATASOURCE, "org-1", "env-1")
        result = await fetcher.fetch_latest("m", "f", "(c)", 1.0)
        assert result.outcome is MetricOutcome.QUERY_ERROR
        assert result.reason == "HTTP 502"
        assert result.status_code == 502

    @pytest.mark.asyncio
    async def test_timeout_cancels_request(self) -> None:
        """A slow query is cancelled and reported as a timeout."""
        cancelled = asyncio.Event()

        async def hang(url: str, **kwargs: Any) -> ApiResponse:
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise
            return series(1.0)

        fetcher = MetricFetcher(hang, DATASOURCE, "org-1", "env-1", query_timeout=0.01)
        result = await fetcher.fetch_latest("m", "f", "(c)", 1.0)

        assert result.outcome is MetricOutcome.TIMEOUT
        assert result.reason == "timeout"
        assert cancelled.is_set()

    @pytest.mark.asyncio
    async def test_error_rate(self) -> None:
        fetcher = MetricFetcher(
            routed(total=series(100, 200, None), failed=series(1, 6)),
            DATASOURCE, "org-1", "env-1",
        )
        result = await fetcher.fetch_error_rate("(c)")
        assert result.value == pytest.approx(2.33)

    @pytest.mark.asyncio
    async def test_error_rate_zero_traffic(self) -> None:
        """No requests at all is a 0 error rate, not missing data."""
        fetcher = MetricFetcher(
            routed(total=series(0, 0), failed=series(0, 0)), DATASOURCE, "org-1", "env-1"
        )
        result = await fetcher.fetch_error_rate("(c)")
        assert result.outcome is MetricOutcome.OK
        assert result.value == 0.0

    @pytest.mark.asyncio
    async def test_error_rate_missing_when_subquery_fails(self) -> None:
        fetcher = MetricFetcher(
            routed(total=series(10), failed=ApiResponse(500)), DATASOURCE, "org-1", "env-1"
        )
        result = await fetcher.fetch_error_rate("(c)")
        assert result.value is None
        assert result.status_code == 500


class TestFetchAppMetrics:
    """Tests for the combined per-application fetch."""

    @pytest.mark.asyncio
    async def test_all_metrics(self) -> None:
        fetcher = MetricFetcher(
            routed(
                cpu=series(0.253),
                memory=series(300 * 1024 * 1024 + 400_000),
                total=series(50),
                failed=series(0),
            ),
            DATASOURCE, "org-1", "env-1",
        )
        result = await fetcher.fetch_app_metrics(_app())

        assert result.success is True
        assert result.error is None
        assert result.metrics.cpu == pytest.approx(25.3)
        assert result.metrics.memory == 300.0
        assert result.metrics.error_rate == 0.0

    @pytest.mark.asyncio
    async def test_cpu_is_clamped(self) -> None:
        fetcher = MetricFetcher(routed(cpu=series(1.7)), DATASOURCE, "org-1", "env-1")
        result = await fetcher.fetch_app_metrics(_app())
        assert result.metrics.cpu == 100.0

    @pytest.mark.asyncio
    async def test_partial_timeout_keeps_other_metrics(self) -> None:
        async def slow() -> ApiResponse:
            await asyncio.sleep(10)
            return series(0.5)

        fetcher = MetricFetcher(
            routed(cpu=slow, memory=series(512 * 1024 * 1024), total=series(0), failed=series(0)),
            DATASOURCE, "org-1", "env-1", query_timeout=0.01,
        )
        result = await fetcher.fetch_app_metrics(_app())

        assert result.success is True
        assert result.metrics.cpu is None
        assert result.metrics.memory == 512.0

    @pytest.mark.asyncio
    async def test_empty_request_series_is_zero_error_rate(self) -> None:
        fetcher = MetricFetcher(
            routed(total=ApiResponse(200, {"results": [{}]}),
                   failed=ApiResponse(200, {"results": [{}]})),
            DATASOURCE, "org-1", "env-1",
        )
        result = await fetcher.fetch_app_metrics(_app())

        assert result.success is True
        assert result.metrics.error_rate == 0.0

    @pytest.mark.asyncio
    async def test_all_queries_fail(self) -> None:
        fetcher = MetricFetcher(AsyncMock(return_value=ApiResponse(401)),
                                DATASOURCE, "org-1", "env-1")
        result = await fetcher.fetch_app_metrics(_app())

        assert result.success is False
        assert result.error == "No metrics data (cpu: HTTP 401)"
        assert result.status_code == 401

    @pytest.mark.asyncio
    async def test_transport_error_is_query_error(self) -> None:
        fetcher = MetricFetcher(AsyncMock(side_effect=OSError("reset")),
                                DATASOURCE, "org-1", "env-1")
        result = await fetcher.fetch_app_metrics(_app())

        assert result.success is False
        assert result.error is not None
        assert "OSError: reset" in result.error
        assert result.status_code is None
