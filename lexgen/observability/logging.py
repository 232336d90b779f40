"""Centralised logging helpers for lexgen."""

from __future__ import annotations

import logging
import os
from typing import Dict, Optional

LOGGER_NAME = "lexgen"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_LOGGER_CACHE: Dict[str, logging.Logger] = {}


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Return a cached :class:`logging.Logger` instance."""

    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]


def resolve_log_level(level: Optional[str] = None) -> int:
    """Numeric level from ``level``, then ``LEXGEN_LOG_LEVEL``, then ``info``."""
    name = (level or os.getenv("LEXGEN_LOG_LEVEL") or "info").lower()
    return _LEVELS.get(name, logging.INFO)


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Install a console handler on the ``lexgen`` logger.

    Calling it again only adjusts the level, so repeated CLI invocations in
    one process do not stack handlers.
    """
    logger = get_logger()
    logger.setLevel(resolve_log_level(level))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger


__all__ = ["LOGGER_NAME", "configure_logging", "get_logger", "resolve_log_level"]
