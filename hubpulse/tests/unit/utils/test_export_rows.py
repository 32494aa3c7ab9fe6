"""Tests for dashboard export rows."""

from __future__ import annotations

from hubpulse.constants.enums import HealthStatus, PlatformVariant
from hubpulse.models.core.application_summary import ApplicationMetrics, ApplicationSummary
from hubpulse.models.core.dashboard_summary import DashboardSnapshot
from hubpulse.utils.export_rows import EXPORT_HEADERS, to_export_rows


def _snapshot(*apps: ApplicationSummary) -> DashboardSnapshot:
    return DashboardSnapshot(
        session_id=1,
        environment_id="env-1",
        environment_name="Production",
        organization_id="org-1",
        applications=list(apps),
    )


class TestToExportRows:
    """Tests for to_export_rows."""

    def test_header_only_for_empty_snapshot(self) -> None:
        assert to_export_rows(_snapshot()) == [list(EXPORT_HEADERS)]

    def test_header_columns(self) -> None:
        assert EXPORT_HEADERS == (
            "Application",
            "Type",
            "Status",
            "Health Score",
            "Health Status",
            "CPU %",
            "Memory MB",
            "Runtime Version",
            "Region",
        )

    def test_row_with_metrics(self) -> None:
        app = ApplicationSummary(
            id="orders",
            name="orders",
            domain="orders",
            platform_variant=PlatformVariant.CLOUDHUB_1,
            status="STARTED",
            health_score=90,
            health_status=HealthStatus.HEALTHY,
            metrics=ApplicationMetrics(cpu=12.345, memory=512.0, error_rate=0.0),
            runtime_version="4.4.0",
            region="us-east-1",
        )
        rows = to_export_rows(_snapshot(app))
        assert rows[1] == [
            "orders", "CH1", "STARTED", "90", "healthy", "12.3", "512", "4.4.0", "us-east-1",
        ]

    def test_missing_values_as_not_available(self) -> None:
        app = ApplicationSummary(
            id="edge",
            name="edge",
            domain="edge",
            platform_variant=PlatformVariant.HYBRID,
            status="STOPPED",
            health_score=60,
            health_status=HealthStatus.WARNING,
            runtime_version="",
            region="",
        )
        row = to_export_rows(_snapshot(app))[1]
        assert row[5:] == ["N/A", "N/A", "N/A", "N/A"]

    def test_zero_cpu_is_reported(self) -> None:
        app = ApplicationSummary(
            id="idle",
            name="idle",
            domain="idle",
            platform_variant=PlatformVariant.CLOUDHUB_2,
            status="APPLIED",
            metrics=ApplicationMetrics(cpu=0.0),
        )
        assert to_export_rows(_snapshot(app))[1][5] == "0.0"

    def test_rows_follow_snapshot_order(self) -> None:
        apps = [
            ApplicationSummary(
                id=name, name=name, domain=name,
                platform_variant=PlatformVariant.CLOUDHUB_2, status="APPLIED",
            )
            for name in ("b", "a", "c")
        ]
        rows = to_export_rows(_snapshot(*apps))
        assert [row[0] for row in rows[1:]] == ["b", "a", "c"]
