"""Application fetcher - lists deployments from the three runtime planes."""

from __future__ import annotations

import logging
from typing import Any

from hubpulse.constants.enums import FetchSources, Region
from hubpulse.constants.values import (
    CH1_APPLICATIONS_PATH,
    CH2_AMC_DEPLOYMENTS_PATH,
    CH2_ARM_APPLICATIONS_PATH,
    CH2_ARM_TARGET_SUBTYPE,
    CH2_ARM_TARGET_TYPE,
    ENV_ID_HEADER,
    HYBRID_APPLICATIONS_PATH,
    ORG_ID_HEADER,
)
from hubpulse.controllers.base.platform_client import ApiResponse, RequestFunc
from hubpulse.models.state.errors import SourceUnavailableError

logger = logging.getLogger(__name__)


class ApplicationFetcher:
    """Fetches raw deployment records for CH1, CH2 and Hybrid."""

    _WRAPPER_KEYS = ("data", "items")

    def __init__(self, request_func: RequestFunc, region: str = Region.US.value) -> None:
        """Initialize with request function.

        Args:
            request_func: Async function issuing GET requests, returning ApiResponse
            region: Control plane region id; selects the CH2 listing API
        """
        self._request = request_func
        self.region = region.lower()

    @staticmethod
    def _env_headers(environment_id: str, organization_id: str) -> dict[str, str]:
        return {
            ENV_ID_HEADER: environment_id,
            ORG_ID_HEADER: organization_id,
        }

    @classmethod
    def normalize_to_array(cls, payload: Any) -> list[dict[str, Any]] | None:
        """Extract the record list from a bare list or a data/items wrapper.

        Returns:
            List of record dicts, or None when the payload has no list shape.
        """
        if isinstance(payload, list):
            return [item for item in payload if isinstance(item, dict)]
        if isinstance(payload, dict):
            for key in cls._WRAPPER_KEYS:
                nested = payload.get(key)
                if isinstance(nested, list):
                    return [item for item in nested if isinstance(item, dict)]
        return None

    def _records_from_response(
        self, source: FetchSources, response: ApiResponse
    ) -> list[dict[str, Any]]:
        if not response.ok:
            raise SourceUnavailableError(
                source.value,
                f"HTTP {response.status_code}",
                status_code=response.status_code,
            )
        records = self.normalize_to_array(response.data)
        if records is None:
            raise SourceUnavailableError(source.value, "malformed payload")
        return records

    async def fetch_cloudhub1(
        self, environment_id: str, organization_id: str
    ) -> list[dict[str, Any]]:
        """Fetch CloudHub 1.0 applications.

        Raises:
            SourceUnavailableError: On non-200 status or malformed payload.
            httpx.HTTPError: On transport failure.
        """
        response = await self._request(
            CH1_APPLICATIONS_PATH,
            headers=self._env_headers(environment_id, organization_id),
        )
        return self._records_from_response(FetchSources.CLOUDHUB_1, response)

    async def fetch_cloudhub2(
        self, environment_id: str, organization_id: str
    ) -> list[dict[str, Any]]:
        """Fetch CloudHub 2.0 deployments.

        The US control plane exposes Application Manager; EU and GOV go
        through ARM, which also lists non-CH2 targets that are filtered out.
        """
        if self.region == Region.US.value:
            response = await self._request(
                CH2_AMC_DEPLOYMENTS_PATH.format(
                    organization_id=organization_id,
                    environment_id=environment_id,
                )
            )
            return self._records_from_response(FetchSources.CLOUDHUB_2, response)

        response = await self._request(
            CH2_ARM_APPLICATIONS_PATH,
            headers=self._env_headers(environment_id, organization_id),
        )
        records = self._records_from_response(FetchSources.CLOUDHUB_2, response)
        return [
            record
            for record in records
            if isinstance(record.get("target"), dict)
            and record["target"].get("type") == CH2_ARM_TARGET_TYPE
            and record["target"].get("subtype") == CH2_ARM_TARGET_SUBTYPE
        ]

    async def fetch_hybrid(
        self, environment_id: str, organization_id: str
    ) -> list[dict[str, Any]]:
        """Fetch Hybrid (self-hosted runtime) applications."""
        response = await self._request(
            HYBRID_APPLICATIONS_PATH,
            headers=self._env_headers(environment_id, organization_id),
        )
        return self._records_from_response(FetchSources.HYBRID, response)
