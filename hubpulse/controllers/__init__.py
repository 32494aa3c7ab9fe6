"""Controllers module for HubPulse.

Domain-driven controllers for discovering deployed applications, loading
their telemetry and aggregating them into a dashboard snapshot.
"""

from __future__ import annotations

# Base classes
from hubpulse.controllers.base import BaseController, FetchStatus

# Applications domain
from hubpulse.controllers.applications.controller import ApplicationsController

# Dashboard domain
from hubpulse.controllers.dashboard.controller import DashboardController

# Metrics domain
from hubpulse.controllers.metrics.controller import MetricsController

__all__ = [
    # Base
    "BaseController",
    "FetchStatus",
    # Domain Controllers
    "ApplicationsController",
    "DashboardController",
    "MetricsController",
]
