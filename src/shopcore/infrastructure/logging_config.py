"""Logging setup for the ``shopcore`` logger tree."""

from __future__ import annotations

import logging

from shopcore.infrastructure.config import Settings

LOG_FORMAT = "[%(asctime)s] %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def configure_logging(settings: Settings) -> logging.Logger:
    """Attach one stderr handler to the ``shopcore`` logger.

    Safe to call more than once; the handler is only added the first time.
    """
    logger = logging.getLogger("shopcore")
    logger.setLevel(settings.log_level)
    if not any(getattr(h, "_shopcore", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        handler._shopcore = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    logger.propagate = False
    return logger
