"""Logging setup for applications embedding HubPulse."""

from __future__ import annotations

import logging
import sys

from hubpulse.constants.defaults import LOG_LEVEL_DEFAULT

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = LOG_LEVEL_DEFAULT) -> logging.Logger:
    """Attach a stream handler to the ``hubpulse`` logger.

    Calling it again only updates the level.
    """
    logger = logging.getLogger("hubpulse")
    resolved = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(resolved)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logger
