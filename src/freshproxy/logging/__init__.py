from __future__ import annotations

"""Loguru based logging for freshproxy."""

from .formatters import LoggerFormatter
from .main import (
    Logger,
    create_logger,
    get_logger,
    change_logger_level,
    logger,
)

__all__ = [
    "LoggerFormatter",
    "Logger",
    "create_logger",
    "get_logger",
    "change_logger_level",
    "logger",
]
