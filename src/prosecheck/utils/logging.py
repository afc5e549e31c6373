"""Logging utilities.

Purpose:
    Centralize logging configuration for the package.

Key responsibilities:
    - Provide a helper to obtain loggers under the ``prosecheck`` namespace.
    - Attach a single stream handler when the CLI asks for output.

Notes/Edge cases:
    - :func:`configure_logging` is idempotent; calling it twice only updates
      the level.
    - Library code never configures handlers on import.
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "prosecheck"
_HANDLER_ATTR = "_prosecheck_handler"


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package namespace."""

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: str | int = "WARNING") -> logging.Logger:
    """Configure the package root logger and return it."""

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logger.setLevel(level)
    if not any(getattr(h, _HANDLER_ATTR, False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        setattr(handler, _HANDLER_ATTR, True)
        logger.addHandler(handler)
    return logger


__all__ = ["ROOT_LOGGER_NAME", "configure_logging", "get_logger"]
