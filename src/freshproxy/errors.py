from __future__ import annotations

"""Errors raised while building a fresh proxy.

Failures raised by a provider, or by the operation forwarded to the resolved
target, are never wrapped: they reach the caller exactly as raised.
"""

import typing as t


class FreshProxyError(Exception):
    """Base class for errors raised by ``freshproxy`` itself."""


class InvalidProviderError(FreshProxyError, TypeError):
    """The target provider handed to a proxy is not callable."""

    def __init__(self, provider: t.Any) -> None:
        super().__init__(f"Target provider must be callable, got {type(provider).__name__}: {provider!r}")
        self.provider = provider
        """The rejected provider"""


class InvalidOverrideError(FreshProxyError, TypeError):
    """An override table entry is not a recognised kind or not callable."""

    def __init__(self, key: t.Any, msg: str) -> None:
        super().__init__(msg)
        self.key = key
        """The offending override table key"""


__all__ = ["FreshProxyError", "InvalidProviderError", "InvalidOverrideError"]
