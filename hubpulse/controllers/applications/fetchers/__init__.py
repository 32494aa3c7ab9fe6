"""Fetchers for deployment listings."""

from hubpulse.controllers.applications.fetchers.application_fetcher import ApplicationFetcher

__all__ = ["ApplicationFetcher"]
