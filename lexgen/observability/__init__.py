"""Logging helpers for the compiler and its CLI."""

from __future__ import annotations

from .logging import configure_logging, get_logger, resolve_log_level

__all__ = ["configure_logging", "get_logger", "resolve_log_level"]
