"""Logging configuration for the Steno API.

All loggers live under the ``steno`` namespace. Request and performance
events get their own named loggers so they can be routed separately.
"""

from __future__ import annotations

import logging
import sys

from core.config import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | None = None) -> None:
    """Attach a console handler to the ``steno`` logger.

    Args:
        level: Log level name; defaults to ``settings.log_level``.
    """
    level_name = (level or get_settings().log_level).upper()

    root = logging.getLogger("steno")
    root.setLevel(getattr(logging, level_name, logging.INFO))

    if not any(getattr(handler, "_steno_handler", False) for handler in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        handler._steno_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)


def get_request_logger() -> logging.Logger:
    return logging.getLogger("steno.api.requests")


def get_performance_logger() -> logging.Logger:
    return logging.getLogger("steno.api.performance")
