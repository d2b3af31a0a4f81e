"""Logging setup for the Threadboard application."""

from __future__ import annotations

import logging

from threadboard.core.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from settings; safe to call more than once."""
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel((level or settings.log_level).upper())
