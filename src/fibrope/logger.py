"""logger.py - Logging setup for fibrope modules"""

from __future__ import annotations

import logging

from .config import LOG_FORMAT, LOGGER_NAME, get_config

_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return
    root = logging.getLogger(LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    level = logging.getLevelName(get_config().log_level)
    # Unknown level names come back as "Level X" strings
    root.setLevel(level if isinstance(level, int) else logging.WARNING)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the ``fibrope`` namespace.

    Module names that already start with the package name are used as is.
    """
    _configure_root()
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
