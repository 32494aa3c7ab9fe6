"""Metrics controller and Visualizer fetchers."""

from hubpulse.controllers.metrics.controller import MetricsController, chunk

__all__ = ["MetricsController", "chunk"]
