"""Cache models."""

from hubpulse.models.cache.datasource_cache import DatasourceCache, VisualizerDatasource

__all__ = ["DatasourceCache", "VisualizerDatasource"]
