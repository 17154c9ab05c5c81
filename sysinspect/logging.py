"""
Logging helpers for sysinspect.

Library modules log through logging.getLogger(__name__); get_logger()
additionally makes sure the 'sysinspect' logger has a console handler.
"""

from __future__ import annotations

import logging
import threading

from .constants import DEFAULT_LOG_LEVEL
from .settings import get_setting

ROOT_LOGGER_NAME = 'sysinspect'
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

_configured = False
_configure_lock = threading.Lock()


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """
    Attach a stream handler to the sysinspect logger.

    Args:
        level: Logging level; defaults to the 'log_level' setting.

    Returns:
        The sysinspect root logger.
    """
    global _configured

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if level is None:
        level = get_setting('log_level', DEFAULT_LOG_LEVEL)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    with _configure_lock:
        if not _configured:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root.addHandler(handler)
            root.propagate = False
            _configured = True
        root.setLevel(level)

    return root


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the sysinspect namespace."""
    if not _configured:
        configure_logging()
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + '.'):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
