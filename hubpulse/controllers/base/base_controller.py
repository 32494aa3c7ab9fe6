"""Base controller with async patterns shared by HubPulse controllers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from hubpulse.constants.enums import FetchState

logger = logging.getLogger(__name__)


@dataclass
class FetchStatus:
    """Status tracking for a single data source fetch operation."""

    source_name: str
    state: FetchState = FetchState.SUCCESS
    error_message: str | None = None
    item_count: int = 0
    last_updated: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "source_name": self.source_name,
            "state": self.state.value,
            "error_message": self.error_message,
            "item_count": self.item_count,
            "last_updated": self.last_updated.isoformat()
            if self.last_updated
            else None,
        }


class BaseController(ABC):
    """Base controller class for data source orchestration.

    Subclasses track per-source fetch state so callers can tell partial
    results apart from complete ones without catching exceptions.
    """

    def __init__(self) -> None:
        self._fetch_states: dict[str, FetchStatus] = {}

    @property
    def fetch_states(self) -> dict[str, FetchStatus]:
        return dict(self._fetch_states)

    def _record_fetch(
        self,
        source_name: str,
        state: FetchState,
        *,
        error_message: str | None = None,
        item_count: int = 0,
        last_updated: datetime | None = None,
    ) -> None:
        self._fetch_states[source_name] = FetchStatus(
            source_name=source_name,
            state=state,
            error_message=error_message,
            item_count=item_count,
            last_updated=last_updated,
        )

    def all_sources_failed(self) -> bool:
        """True when every tracked source ended in an error state."""
        return bool(self._fetch_states) and all(
            status.state == FetchState.ERROR for status in self._fetch_states.values()
        )

    @abstractmethod
    async def fetch_all(self, *args: Any, **kwargs: Any) -> Any:
        """Fetch all data from the controller's sources."""
        ...
