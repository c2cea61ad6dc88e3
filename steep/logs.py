"""Logging setup for the API process."""

from __future__ import annotations

import logging

from steep.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings) -> None:
    """Configure the root logger once at startup."""
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
    logging.getLogger("steep").setLevel(settings.log_level.upper())
