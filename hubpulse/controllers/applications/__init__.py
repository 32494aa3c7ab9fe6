"""Applications domain: deployment discovery and normalization."""

from hubpulse.controllers.applications.controller import ApplicationsController
from hubpulse.controllers.applications.fetchers import ApplicationFetcher
from hubpulse.controllers.applications.parsers import ApplicationParser

__all__ = ["ApplicationFetcher", "ApplicationParser", "ApplicationsController"]
