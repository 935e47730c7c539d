"""
Logging for the podcast dashboard.

Modules call ``get_logger(__name__)``. Only the dashboard entry point calls
``configure_logging()``, which gives the ``podcast_dashboard`` logger a stderr
handler and quiets NiceGUI's own logger (page connects, reloads) to
``PODCAST_DASHBOARD_NICEGUI_LOG_LEVEL``, WARNING by default. The root logger
is never touched and no log files are written.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "podcast_dashboard"
LOG_LEVEL_ENV = "PODCAST_DASHBOARD_LOG_LEVEL"

NICEGUI_LOGGER_NAME = "nicegui"
NICEGUI_LOG_LEVEL_ENV = "PODCAST_DASHBOARD_NICEGUI_LOG_LEVEL"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Optional[Union[str, int]], env: str, default: str) -> int:
    if level is None:
        level = os.environ.get(env, default)
    if isinstance(level, str):
        return getattr(logging, level.upper(), getattr(logging, default))
    return level


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    nicegui_level: Optional[Union[str, int]] = None,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure the podcast_dashboard logger and NiceGUI's log level.

    Parameters
    ----------
    level:
        Package level. Defaults to PODCAST_DASHBOARD_LOG_LEVEL, else INFO.
    nicegui_level:
        Level for the ``nicegui`` logger. Defaults to
        PODCAST_DASHBOARD_NICEGUI_LOG_LEVEL, else WARNING.
    force:
        Replace existing package handlers instead of keeping a present
        stderr handler.
    """
    level = _resolve_level(level, LOG_LEVEL_ENV, "INFO")
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    logging.getLogger(NICEGUI_LOGGER_NAME).setLevel(
        _resolve_level(nicegui_level, NICEGUI_LOG_LEVEL_ENV, "WARNING")
    )

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT))
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger ``name``, or the package logger when name is None."""
    return logging.getLogger(name or LOGGER_NAME)
