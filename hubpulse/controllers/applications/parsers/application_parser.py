"""Application parser - normalizes CH1, CH2 and Hybrid deployment records."""

from __future__ import annotations

import uuid
from contextlib import suppress
from datetime import datetime, timezone
from typing import Any

from hubpulse.constants.defaults import (
    MEMORY_LIMIT_MB_DEFAULT,
    NOT_AVAILABLE,
    UNKNOWN_STATUS,
    UNKNOWN_VALUE,
)
from hubpulse.constants.enums import PlatformVariant
from hubpulse.models.core.application_summary import ApplicationSummary
from hubpulse.utils.resource_parser import (
    first_present,
    get_nested,
    parse_memory_limit_from_string,
    parse_memory_limit_mb,
)


class ApplicationParser:
    """Parses raw deployment records into ApplicationSummary skeletons.

    Health fields keep their provisional defaults (100 / healthy) until the
    first scoring pass.
    """

    # Ordered memory limit candidates, most specific first
    _MEMORY_LIMIT_PATHS: tuple[tuple[str, ...], ...] = (
        ("workers", "type", "memory"),
        ("workers", "type", "memoryInMB"),
        ("workerType", "memory"),
        ("resources", "memory"),
        ("target", "resources", "memory"),
        ("memoryReserved",),
    )

    def __init__(self, memory_limit_default_mb: int = MEMORY_LIMIT_MB_DEFAULT) -> None:
        """Initialize application parser.

        Args:
            memory_limit_default_mb: Limit used when no candidate field parses
        """
        self._memory_limit_default_mb = memory_limit_default_mb

    @staticmethod
    def _qualified_id(variant: PlatformVariant, raw_id: str | None) -> str:
        """Prefix the upstream id with its source so ids never collide across planes."""
        return f"{variant.value}:{raw_id or uuid.uuid4().hex[:12]}"

    @staticmethod
    def _as_text(value: Any) -> str | None:
        """Return value as a string when it is a non-empty scalar."""
        if isinstance(value, str):
            return value or None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return None

    @staticmethod
    def _as_count(value: Any) -> int | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value or None
        if isinstance(value, float):
            return int(value) or None
        if isinstance(value, list):
            return len(value) or None
        return None

    @staticmethod
    def _parse_timestamp_ms(value: Any) -> int | None:
        """Parse epoch-millisecond numbers or ISO-8601 strings."""
        if isinstance(value, bool) or value is None:
            return None
        if isinstance(value, (int, float)):
            return int(value)
        if isinstance(value, str) and value:
            with suppress(ValueError):
                parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
                if parsed.tzinfo is None:
                    parsed = parsed.replace(tzinfo=timezone.utc)
                return int(parsed.timestamp() * 1000)
            with suppress(ValueError):
                return int(float(value))
        return None

    def _runtime_version(self, app: dict[str, Any], *extra: Any) -> str:
        mule_version = app.get("muleVersion")
        return (
            first_present(
                *extra,
                self._as_text(get_nested(mule_version, "version")),
                self._as_text(mule_version),
            )
            or NOT_AVAILABLE
        )

    def resolve_memory_limit_mb(
        self, raw: dict[str, Any], worker_type: str | None = None
    ) -> int:
        """Resolve the memory limit (MB) from the raw record.

        Order: structured candidate fields, the worker type name
        (e.g. "0.2 vCores / 1 GB"), then the configured default.
        """
        for path in self._MEMORY_LIMIT_PATHS:
            parsed = parse_memory_limit_mb(get_nested(raw, *path))
            if parsed is not None and parsed > 0:
                return parsed

        worker_type_name = first_present(
            worker_type,
            get_nested(raw, "workers", "type", "name"),
            get_nested(raw, "workerType", "name"),
        )
        if isinstance(worker_type_name, str):
            parsed = parse_memory_limit_from_string(worker_type_name)
            if parsed is not None and parsed > 0:
                return parsed

        return self._memory_limit_default_mb

    def parse_cloudhub1(self, app: dict[str, Any]) -> ApplicationSummary:
        """Normalize a CloudHub 1.0 application record."""
        domain = self._as_text(app.get("domain"))
        name = first_present(domain, self._as_text(app.get("name"))) or UNKNOWN_VALUE
        workers = app.get("workers")
        worker_type = (
            first_present(
                self._as_text(get_nested(workers, "type", "name")),
                self._as_text(app.get("workerType")),
            )
            or NOT_AVAILABLE
        )

        summary = ApplicationSummary(
            id=self._qualified_id(
                PlatformVariant.CLOUDHUB_1,
                first_present(domain, self._as_text(app.get("id"))),
            ),
            name=name,
            domain=name,
            platform_variant=PlatformVariant.CLOUDHUB_1,
            status=self._as_text(app.get("status")) or UNKNOWN_STATUS,
            runtime_version=self._runtime_version(app),
            workers=first_present(
                self._as_count(get_nested(workers, "amount")),
                self._as_count(workers),
            )
            or 1,
            worker_type=worker_type,
            region=self._as_text(app.get("region")) or NOT_AVAILABLE,
            last_updated=self._parse_timestamp_ms(app.get("lastUpdateTime")),
            raw_data=app,
        )
        summary.memory_limit_mb = self.resolve_memory_limit_mb(
            app, worker_type if worker_type != NOT_AVAILABLE else None
        )
        return summary

    def parse_cloudhub2(self, app: dict[str, Any]) -> ApplicationSummary:
        """Normalize a CloudHub 2.0 deployment record (AMC or ARM shape)."""
        name = (
            first_present(
                self._as_text(app.get("name")),
                self._as_text(get_nested(app, "artifact", "name")),
                self._as_text(get_nested(app, "application", "domain")),
            )
            or UNKNOWN_VALUE
        )
        status = (
            first_present(
                self._as_text(get_nested(app, "application", "status")),
                self._as_text(app.get("status")),
                self._as_text(app.get("lastReportedStatus")),
            )
            or UNKNOWN_STATUS
        )
        deployment_id = self._as_text(app.get("id"))

        summary = ApplicationSummary(
            id=self._qualified_id(PlatformVariant.CLOUDHUB_2, deployment_id),
            name=name,
            domain=name,
            platform_variant=PlatformVariant.CLOUDHUB_2,
            status=status,
            runtime_version=self._runtime_version(
                app, self._as_text(app.get("currentRuntimeVersion"))
            ),
            replicas=first_present(
                self._as_count(app.get("replicas")),
                self._as_count(get_nested(app, "target", "replicas")),
            )
            or 1,
            region=first_present(
                self._as_text(get_nested(app, "target", "name")),
                self._as_text(app.get("region")),
            )
            or NOT_AVAILABLE,
            deployment_id=deployment_id,
            last_updated=self._parse_timestamp_ms(app.get("lastModifiedDate")),
            raw_data=app,
        )
        summary.memory_limit_mb = self.resolve_memory_limit_mb(app)
        return summary

    def parse_hybrid(self, app: dict[str, Any]) -> ApplicationSummary:
        """Normalize a Hybrid (self-hosted runtime) application record."""
        name = (
            first_present(
                self._as_text(app.get("name")),
                self._as_text(get_nested(app, "artifact", "name")),
            )
            or UNKNOWN_VALUE
        )
        status = (
            first_present(
                self._as_text(app.get("status")),
                self._as_text(app.get("desiredStatus")),
            )
            or UNKNOWN_STATUS
        )

        summary = ApplicationSummary(
            id=self._qualified_id(PlatformVariant.HYBRID, self._as_text(app.get("id"))),
            name=name,
            domain=name,
            platform_variant=PlatformVariant.HYBRID,
            status=status,
            runtime_version=self._as_text(get_nested(app, "muleVersion", "version"))
            or NOT_AVAILABLE,
            last_updated=self._parse_timestamp_ms(app.get("lastUpdateTime")),
            raw_data=app,
        )
        summary.memory_limit_mb = self.resolve_memory_limit_mb(app)
        return summary

    def parse(self, variant: PlatformVariant, app: dict[str, Any]) -> ApplicationSummary:
        """Dispatch to the variant-specific normalizer."""
        if variant is PlatformVariant.CLOUDHUB_1:
            return self.parse_cloudhub1(app)
        if variant is PlatformVariant.CLOUDHUB_2:
            return self.parse_cloudhub2(app)
        return self.parse_hybrid(app)
