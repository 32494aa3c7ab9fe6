"""Dashboard aggregation controller."""

from hubpulse.controllers.dashboard.controller import DashboardController

__all__ = ["DashboardController"]
