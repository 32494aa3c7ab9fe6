"""Base controller classes and the platform HTTP client."""

from hubpulse.controllers.base.base_controller import BaseController, FetchStatus
from hubpulse.controllers.base.platform_client import (
    ApiResponse,
    PlatformClient,
    RequestFunc,
    SessionProvider,
    TokenProvider,
    resolve_base_url,
)

__all__ = [
    "ApiResponse",
    "BaseController",
    "FetchStatus",
    "PlatformClient",
    "RequestFunc",
    "SessionProvider",
    "TokenProvider",
    "resolve_base_url",
]
