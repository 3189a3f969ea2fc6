from __future__ import annotations

"""Factory helpers for the freshproxy logger.

Each logger runs on its own Loguru ``Core`` so the package never adds to, or
removes from, the handlers an application configured on the global Loguru
logger.
"""

import sys
import threading
import typing as t

from loguru._logger import Core as _Core
from loguru._logger import Logger as _Logger

from ..settings import get_settings
from .formatters import LoggerFormatter

if t.TYPE_CHECKING:
    from loguru import Record

_lock = threading.Lock()
_logger_contexts: t.Dict[str, 'Logger'] = {}

__all__ = [
    "Logger",
    "create_logger",
    "get_logger",
    "change_logger_level",
    "logger",
]


class Logger(_Logger):

    name: t.Optional[str] = None
    handler_id: t.Optional[int] = None
    sink: t.Any = None
    format: t.Any = None


def create_logger(
    name: str = 'freshproxy',
    level: t.Union[str, int, None] = None,
    format: t.Optional[t.Callable[['Record'], str]] = None,
    sink: t.Any = None,
    **kwargs: t.Any,
) -> Logger:
    """Instantiate a logger with a single handler.

    Args:
        name: Registry key for the logger instance.
        level: Minimum level of the handler. Defaults to
            ``ProxySettings.log_level``.
        format: Optional callable used to format records.
        sink: Where records go. Defaults to ``sys.stderr``.
        **kwargs: Forwarded to :meth:`loguru.Logger.add`.
    """
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = level.upper()

    _logger = Logger(
        core = _Core(),
        exception = None,
        depth = 0,
        record = False,
        lazy = False,
        colors = False,
        raw = False,
        capture = True,
        patchers = [],
        extra = {},
    )
    _logger.name = name
    _logger.sink = sink if sink is not None else sys.stderr
    _logger.format = format if format is not None else LoggerFormatter.default_formatter
    _logger.handler_id = _logger.add(
        _logger.sink,
        level = level,
        format = _logger.format,
        backtrace = True,
        **kwargs,
    )
    _logger_contexts[name] = _logger
    return _logger


def get_logger(name: t.Optional[str] = None, **kwargs: t.Any) -> Logger:
    """Return the registered logger for ``name``, creating it on first use."""
    name = name or 'freshproxy'
    if name in _logger_contexts:
        return _logger_contexts[name]
    with _lock:
        if name not in _logger_contexts:
            create_logger(name = name, **kwargs)
    return _logger_contexts[name]


def change_logger_level(level: t.Union[str, int], name: t.Optional[str] = None) -> None:
    """Swap the handler of the ``name`` logger for one at ``level``."""
    _logger = get_logger(name)
    if isinstance(level, str):
        level = level.upper()
    with _lock:
        if _logger.handler_id is not None:
            _logger.remove(_logger.handler_id)
        _logger.handler_id = _logger.add(
            _logger.sink,
            level = level,
            format = _logger.format,
            backtrace = True,
        )


logger = get_logger()
