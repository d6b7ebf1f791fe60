"""Logging setup for the docshop package."""

from __future__ import annotations

import logging

from .config import get_settings

LOGGER_NAME = "docshop"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a single stream handler to the package logger (idempotent)."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level or get_settings().log_level)
    if not any(getattr(h, "_docshop", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._docshop = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
