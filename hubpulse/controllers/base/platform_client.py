"""Async HTTP client for the Anypoint control plane.

Authentication is owned elsewhere; the client only asks an injected token
provider for a bearer token before each request.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from hubpulse.constants.defaults import REGION_DEFAULT
from hubpulse.constants.timeouts import HTTP_REQUEST_TIMEOUT
from hubpulse.constants.values import REGION_BASE_URLS

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Awaitable[str]]


class SessionProvider(Protocol):
    """Account/session context supplied by the host application."""

    organization_id: str
    organization_name: str
    region: str
    environment_id: str | None

    async def access_token(self) -> str: ...


@dataclass
class ApiResponse:
    """Status code and decoded JSON body of one request."""

    status_code: int
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200


RequestFunc = Callable[..., Awaitable[ApiResponse]]


def resolve_base_url(region: str | None, override: str | None = None) -> str:
    """Return the control plane URL for a region, honouring an explicit override."""
    if override:
        return override.rstrip("/")
    key = (region or REGION_DEFAULT).lower()
    return REGION_BASE_URLS.get(key, REGION_BASE_URLS[REGION_DEFAULT])


class PlatformClient:
    """Thin httpx.AsyncClient wrapper returning ApiResponse objects.

    Transport failures (connect errors, read timeouts) propagate as
    ``httpx.HTTPError``; non-200 statuses do not raise.
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        *,
        base_url: str,
        timeout: float = HTTP_REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token_provider = token_provider
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def get(
        self,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> ApiResponse:
        """Issue a GET request against the control plane."""
        token = await self._token_provider()
        request_headers = {"Authorization": f"Bearer {token}"}
        if headers:
            request_headers.update(headers)

        response = await self._client.get(path, params=params, headers=request_headers)
        try:
            data = response.json()
        except ValueError:
            logger.debug("Non-JSON response from %s (status %s)", path, response.status_code)
            data = None
        return ApiResponse(status_code=response.status_code, data=data)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> PlatformClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
