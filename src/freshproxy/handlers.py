from __future__ import annotations

"""Default forwarding handlers and the override composition rule.

Every default handler calls the provider exactly once and forwards its
arguments untouched to the matching :mod:`freshproxy.reflect` operation.
Overrides share the signature of the handler they replace::

    def logged_get(provider, name, receiver):
        logger.info(f'reading {name}')
        return default_handler('get')(provider, name, receiver)

    proxy = FreshProxy(load_config, overrides = {'get': logged_get})
"""

import collections.abc
import functools
import types
import typing as t

from . import reflect
from .errors import InvalidOverrideError
from .logging import logger
from .settings import get_settings
from .types import OperationKind

if t.TYPE_CHECKING:
    from .types import Handler, PropertyDescriptor, Provider


def default_apply(provider: 'Provider', args: t.Tuple[t.Any, ...], kwargs: t.Dict[str, t.Any]) -> t.Any:
    return reflect.apply(provider(), args, kwargs)


def default_construct(provider: 'Provider', args: t.Tuple[t.Any, ...], kwargs: t.Dict[str, t.Any]) -> t.Any:
    return reflect.construct(provider(), args, kwargs)


def default_define_property(provider: 'Provider', name: str, descriptor: 'PropertyDescriptor') -> bool:
    return reflect.define_property(provider(), name, descriptor)


def default_delete_property(provider: 'Provider', name: str) -> bool:
    return reflect.delete_property(provider(), name)


def default_get(provider: 'Provider', name: str, receiver: t.Any) -> t.Any:
    return reflect.get(provider(), name, receiver)


def default_get_own_property_descriptor(provider: 'Provider', name: str) -> t.Optional['PropertyDescriptor']:
    return reflect.get_own_property_descriptor(provider(), name)


def default_get_prototype_of(provider: 'Provider') -> type:
    return reflect.get_prototype_of(provider())


def default_has(provider: 'Provider', name: str) -> bool:
    return reflect.has(provider(), name)


def default_is_extensible(provider: 'Provider') -> bool:
    return reflect.is_extensible(provider())


def default_own_keys(provider: 'Provider') -> t.List[str]:
    return reflect.own_keys(provider())


def default_prevent_extensions(provider: 'Provider') -> bool:
    return reflect.prevent_extensions(provider())


def default_set(provider: 'Provider', name: str, value: t.Any, receiver: t.Any) -> bool:
    return reflect.set(provider(), name, value, receiver)


def default_set_prototype_of(provider: 'Provider', prototype: type) -> bool:
    return reflect.set_prototype_of(provider(), prototype)


DEFAULT_HANDLERS: t.Mapping[OperationKind, 'Handler'] = types.MappingProxyType({
    OperationKind.APPLY: default_apply,
    OperationKind.CONSTRUCT: default_construct,
    OperationKind.DEFINE_PROPERTY: default_define_property,
    OperationKind.DELETE_PROPERTY: default_delete_property,
    OperationKind.GET: default_get,
    OperationKind.GET_OWN_PROPERTY_DESCRIPTOR: default_get_own_property_descriptor,
    OperationKind.GET_PROTOTYPE_OF: default_get_prototype_of,
    OperationKind.HAS: default_has,
    OperationKind.IS_EXTENSIBLE: default_is_extensible,
    OperationKind.OWN_KEYS: default_own_keys,
    OperationKind.PREVENT_EXTENSIONS: default_prevent_extensions,
    OperationKind.SET: default_set,
    OperationKind.SET_PROTOTYPE_OF: default_set_prototype_of,
})


def default_handler(kind: t.Union[OperationKind, str]) -> 'Handler':
    """Return the default handler for ``kind``."""
    return DEFAULT_HANDLERS[OperationKind.parse(kind)]


def _traced(kind: OperationKind, handler: 'Handler') -> 'Handler':
    """Wrap ``handler`` so every dispatch emits a trace record."""
    handler_name = getattr(handler, '__qualname__', repr(handler))

    @functools.wraps(handler)
    def traced(provider: 'Provider', *args: t.Any) -> t.Any:
        logger.bind(kind = kind.value).trace(f'Dispatching to {handler_name}')
        return handler(provider, *args)
    return traced


def build_handler_table(
    overrides: t.Optional[t.Mapping[t.Union[OperationKind, str], 'Handler']] = None,
    strict: t.Optional[bool] = None,
) -> t.Mapping[OperationKind, 'Handler']:
    """Merge ``overrides`` into the default handlers.

    Args:
        overrides: Mapping of operation kind (member or string value) to the
            handler replacing its default. Kinds left out keep the default.
        strict: When ``True`` an unknown kind or a non-callable handler raises
            :class:`InvalidOverrideError`; when ``False`` the entry is skipped
            with a warning. Defaults to ``ProxySettings.strict_overrides``.

    Returns:
        A read-only mapping holding a handler for every operation kind.
    """
    settings = get_settings()
    if strict is None:
        strict = settings.strict_overrides

    table: t.Dict[OperationKind, 'Handler'] = dict(DEFAULT_HANDLERS)
    if overrides is not None:
        if not isinstance(overrides, collections.abc.Mapping):
            raise InvalidOverrideError(None, f'Override table must be a mapping, got {type(overrides).__name__}')
        installed: t.List[str] = []
        for key, handler in overrides.items():
            try:
                kind = OperationKind.parse(key)
            except ValueError:
                if strict:
                    valid = ', '.join(k.value for k in OperationKind)
                    raise InvalidOverrideError(key, f'Unknown operation kind {key!r}, expected one of: {valid}') from None
                logger.warning(f'Ignoring override for unknown operation kind {key!r}')
                continue
            if not callable(handler):
                if strict:
                    raise InvalidOverrideError(key, f'Override for `{kind}` must be callable, got {handler!r}')
                logger.warning(f'Ignoring non-callable override for `{kind}`: {handler!r}')
                continue
            table[kind] = handler
            installed.append(kind.value)
        if installed:
            logger.debug(f'Installed overrides for: {", ".join(installed)}')

    if settings.trace_dispatch:
        table = {kind: _traced(kind, handler) for kind, handler in table.items()}
    return types.MappingProxyType(table)


__all__ = [
    "DEFAULT_HANDLERS",
    "default_handler",
    "build_handler_table",
    "default_apply",
    "default_construct",
    "default_define_property",
    "default_delete_property",
    "default_get",
    "default_get_own_property_descriptor",
    "default_get_prototype_of",
    "default_has",
    "default_is_extensible",
    "default_own_keys",
    "default_prevent_extensions",
    "default_set",
    "default_set_prototype_of",
]
