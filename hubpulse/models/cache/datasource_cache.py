"""Visualizer datasource cache implementation."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass

from hubpulse.constants.timeouts import DATASOURCE_CACHE_TTL


@dataclass(frozen=True)
class VisualizerDatasource:
    """Coordinates needed to query the Visualizer time-series backend."""

    id: int
    database: str
    base_url: str
    fetched_at: float


class DatasourceCache:
    """Single-entry TTL cache for the resolved Visualizer datasource.

    Notes:
    - Reads (get) are lock-free; an expired entry is left in place and simply
      reported as missing.
    - ``lock`` is held by the resolver across the read-check-fetch-write
      sequence so concurrent callers share a single upstream fetch.
    """

    def __init__(
        self,
        ttl_seconds: float = DATASOURCE_CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._entry: VisualizerDatasource | None = None
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self.lock = asyncio.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def now(self) -> float:
        return self._clock()

    def _is_expired(self, entry: VisualizerDatasource) -> bool:
        return self._clock() - entry.fetched_at >= self._ttl_seconds

    def get(self) -> VisualizerDatasource | None:
        """Return the cached datasource, or None if missing or expired."""
        entry = self._entry
        if entry is None or self._is_expired(entry):
            return None
        return entry

    def set(self, datasource: VisualizerDatasource) -> None:
        """Store a freshly resolved datasource, replacing any prior one."""
        self._entry = datasource
