"""Parsers for deployment listing records."""

from hubpulse.controllers.applications.parsers.application_parser import ApplicationParser

__all__ = ["ApplicationParser"]
