"""Logging setup for the command-line entry point.

Library modules only ever call ``logging.getLogger(__name__)``; handlers
and levels are configured once, here.
"""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s level=%(levelname)s logger=%(name)s %(message)s"


def configure_logging(level: int | str | None = None) -> None:
    """Configure root logging to stderr."""
    desired_level = level or os.getenv("LOG_LEVEL", "INFO")
    if isinstance(desired_level, str):
        desired_level = desired_level.upper()
    logging.root.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))
    logging.basicConfig(level=desired_level, handlers=[handler])
