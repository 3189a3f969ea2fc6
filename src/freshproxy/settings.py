from __future__ import annotations

"""
freshproxy Settings
"""

import typing as t

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ('TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL')


class ProxySettings(BaseSettings):
    """
    freshproxy Settings

    Environment variables:
        FRESHPROXY_LOG_LEVEL: Level of the package logger
        FRESHPROXY_STRICT_OVERRIDES: Reject unknown or non-callable override entries
        FRESHPROXY_TRACE_DISPATCH: Emit a trace record for every dispatched operation
    """

    log_level: str = 'INFO'
    strict_overrides: bool = True
    trace_dispatch: bool = False

    model_config = SettingsConfigDict(
        env_prefix = 'FRESHPROXY_',
        case_sensitive = False,
        extra = 'ignore',
    )

    @field_validator('log_level', mode = 'before')
    @classmethod
    def validate_log_level(cls, v: t.Any) -> t.Any:
        """Normalise the level name to upper case and reject unknown levels"""
        if isinstance(v, str):
            v = v.upper()
            if v not in LOG_LEVELS:
                raise ValueError(f'Unknown log level {v!r}, expected one of: {", ".join(LOG_LEVELS)}')
        return v


_settings: t.Optional[ProxySettings] = None


def get_settings() -> ProxySettings:
    """Return the process-wide settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = ProxySettings()
    return _settings


def reset_settings() -> ProxySettings:
    """
    Re-read the environment and apply the new log level to the package logger.

    Proxies keep the handler table they were built with; only proxies created
    afterwards see the new ``strict_overrides`` and ``trace_dispatch`` values.
    """
    global _settings
    _settings = None
    settings = get_settings()
    from .logging import change_logger_level
    change_logger_level(settings.log_level)
    return settings


__all__ = ["ProxySettings", "get_settings", "reset_settings"]
