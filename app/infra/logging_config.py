"""Logging configuration shared by the API, workers and tests."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from app.config import get_settings

ROOT_LOGGER_NAME = "app"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_initialized = False


def _configure_root() -> None:
    """Attach a single stdout handler to the package logger, once."""
    global _initialized
    if _initialized:
        return
    root = logging.getLogger(ROOT_LOGGER_NAME)
    level_str = (get_settings().log_level or "INFO").upper()
    root.setLevel(getattr(logging, level_str, logging.INFO))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    _initialized = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Return a logger under the ``app`` hierarchy.

    ``get_logger()`` returns the package logger; ``get_logger("catalog")`` and
    ``get_logger(__name__)`` return children that share its handler.
    """
    _configure_root()
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
