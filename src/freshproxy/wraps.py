from __future__ import annotations

"""Decorator turning a zero-argument function into a fresh proxy."""

import typing as t

from .base import create_proxy

if t.TYPE_CHECKING:
    from .types import Handler, OperationKind

ObjT = t.TypeVar("ObjT")


@t.overload
def fresh(
    provider: t.Callable[[], ObjT],
    overrides: t.Optional[t.Mapping[t.Union['OperationKind', str], 'Handler']] = None,
    strict: t.Optional[bool] = None,
) -> ObjT:
    ...


@t.overload
def fresh(
    provider: None = None,
    overrides: t.Optional[t.Mapping[t.Union['OperationKind', str], 'Handler']] = None,
    strict: t.Optional[bool] = None,
) -> t.Callable[[t.Callable[[], ObjT]], ObjT]:
    ...


def fresh(
    provider: t.Optional[t.Callable[[], ObjT]] = None,
    overrides: t.Optional[t.Mapping[t.Union['OperationKind', str], 'Handler']] = None,
    strict: t.Optional[bool] = None,
) -> t.Union[t.Callable[[t.Callable[[], ObjT]], ObjT], ObjT]:
    """Return a proxy that calls the decorated function on every operation.

    Usable bare or with arguments::

        @fresh
        def settings() -> AppSettings:
            return registry.current_settings

        @fresh(overrides = {'set': read_only})
        def client() -> Client:
            return pool.checkout()
    """

    if provider is not None:
        return create_proxy(provider, overrides = overrides, strict = strict)

    def wrapper(func: t.Callable[[], ObjT]) -> ObjT:
        return create_proxy(func, overrides = overrides, strict = strict)

    return wrapper


__all__ = ["fresh"]
