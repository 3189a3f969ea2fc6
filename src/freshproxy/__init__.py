from __future__ import annotations

"""Proxies that re-resolve their target on every operation.

A :class:`FreshProxy` wraps a zero-argument provider instead of an object.
Each attribute read, write, call or reflective query calls the provider and
acts on whatever it returns at that moment::

    from freshproxy import FreshProxy

    settings = FreshProxy(lambda: registry.current_settings)
    settings.host   # always the host of the current settings object
"""

from .version import VERSION
from .errors import FreshProxyError, InvalidProviderError, InvalidOverrideError
from .types import EMPTY, OperationKind, PropertyDescriptor
from .base import FreshProxy, create_proxy, is_proxy, resolve
from . import reflect
from .handlers import DEFAULT_HANDLERS, build_handler_table, default_handler
from .settings import ProxySettings, get_settings, reset_settings
from .wraps import fresh

__version__ = VERSION

__all__ = [
    "FreshProxy",
    "create_proxy",
    "is_proxy",
    "resolve",
    "fresh",
    "reflect",
    "OperationKind",
    "PropertyDescriptor",
    "EMPTY",
    "DEFAULT_HANDLERS",
    "default_handler",
    "build_handler_table",
    "ProxySettings",
    "get_settings",
    "reset_settings",
    "FreshProxyError",
    "InvalidProviderError",
    "InvalidOverrideError",
]
