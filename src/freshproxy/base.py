from __future__ import annotations

"""Proxy object that re-resolves its target for every operation."""

import copy
import math
import operator
import typing as t

from .errors import InvalidProviderError
from .types import OperationKind, Provider, TargetT

if t.TYPE_CHECKING:
    from .types import Handler


__all__ = ["FreshProxy", "create_proxy", "dispatch", "resolve", "is_proxy", "new_method_proxy"]


def _provider_of(proxy: 'FreshProxy') -> Provider:
    return object.__getattribute__(proxy, '_fresh_provider_')


def _handlers_of(proxy: 'FreshProxy') -> t.Mapping[OperationKind, 'Handler']:
    return object.__getattribute__(proxy, '_fresh_handlers_')


def is_proxy(obj: t.Any) -> bool:
    """Whether ``obj`` is a :class:`FreshProxy`, judged by its real type."""
    return issubclass(type(obj), FreshProxy)


def dispatch(proxy: 'FreshProxy', kind: OperationKind, *args: t.Any) -> t.Any:
    """Run the effective ``kind`` handler of ``proxy`` with its provider."""
    return _handlers_of(proxy)[kind](_provider_of(proxy), *args)


def resolve(proxy: t.Any) -> t.Any:
    """Call the provider of ``proxy`` once and return the current target."""
    if not is_proxy(proxy):
        raise TypeError(f'Expected a FreshProxy, got {type(proxy).__name__}')
    return _provider_of(proxy)()


def new_method_proxy(func: t.Callable[..., t.Any]) -> t.Callable[..., t.Any]:
    """Return a method that applies ``func`` to a freshly resolved target."""

    def inner(self: 'FreshProxy', *args: t.Any):
        return func(_provider_of(self)(), *args)
    return inner


def _reflected(func: t.Callable[[t.Any, t.Any], t.Any]) -> t.Callable[[t.Any, t.Any], t.Any]:
    """Swap the operands for the ``__r*__`` operator methods."""

    def inner(target: t.Any, other: t.Any) -> t.Any:
        return func(other, target)
    return inner


class FreshProxy:
    """Stand-in that forwards every operation to ``provider()``.

    The provider is called once per operation and its result is never kept,
    so the proxy always acts on whatever the provider currently returns.
    Attribute access, assignment, deletion, calls and ``__class__`` go
    through the handler table, which callers may partially override. The
    operator protocols (comparison, arithmetic, containers, conversions) are
    forwarded directly.

    Calling a proxy always runs the ``apply`` handler, class targets
    included, and ``dir()``/``vars()`` read the target directly. Overrides
    for ``construct`` and ``own_keys`` therefore only take effect through
    :func:`freshproxy.reflect.construct` and :func:`freshproxy.reflect.own_keys`.

    Copying a proxy copies its current target.
    """

    __slots__ = ('_fresh_provider_', '_fresh_handlers_', '__weakref__')

    if t.TYPE_CHECKING:
        def __new__(
            cls,
            provider: t.Callable[[], TargetT],
            overrides: t.Optional[t.Mapping[t.Union[OperationKind, str], 'Handler']] = None,
            strict: t.Optional[bool] = None,
        ) -> TargetT:
            ...

    def __init__(
        self,
        provider: Provider,
        overrides: t.Optional[t.Mapping[t.Union[OperationKind, str], 'Handler']] = None,
        strict: t.Optional[bool] = None,
    ) -> None:
        """Bind ``provider`` and build the effective handler table.

        Args:
            provider: Zero-argument callable returning the current target.
                It is not called here.
            overrides: Optional mapping of operation kind (member or string
                value) to a handler replacing the default for that kind.
            strict: Reject bad override entries instead of skipping them.
                Defaults to ``ProxySettings.strict_overrides``.

        Raises:
            InvalidProviderError: ``provider`` is not callable.
            InvalidOverrideError: an override entry is invalid in strict mode.
        """
        if not callable(provider):
            raise InvalidProviderError(provider)
        from .handlers import build_handler_table
        object.__setattr__(self, '_fresh_provider_', provider)
        object.__setattr__(self, '_fresh_handlers_', build_handler_table(overrides, strict = strict))

    def __getattribute__(self, name: str) -> t.Any:
        if name == '__class__':
            return dispatch(self, OperationKind.GET_PROTOTYPE_OF)
        return dispatch(self, OperationKind.GET, name, self)

    def __setattr__(self, name: str, value: t.Any) -> None:
        if name == '__class__':
            if not dispatch(self, OperationKind.SET_PROTOTYPE_OF, value):
                raise TypeError(f'__class__ assignment to {value!r} was rejected')
            return
        if not dispatch(self, OperationKind.SET, name, value, self):
            raise AttributeError(f'cannot set attribute {name!r}')

    def __delattr__(self, name: str) -> None:
        if not dispatch(self, OperationKind.DELETE_PROPERTY, name):
            raise AttributeError(f'cannot delete attribute {name!r}')

    def __call__(self, *args: t.Any, **kwargs: t.Any) -> t.Any:
        return dispatch(self, OperationKind.APPLY, args, kwargs)

    def __copy__(self):
        return copy.copy(_provider_of(self)())

    def __deepcopy__(self, memo):
        return copy.deepcopy(_provider_of(self)(), memo)

    __bytes__ = new_method_proxy(bytes)
    __str__ = new_method_proxy(str)
    __repr__ = new_method_proxy(repr)
    __format__ = new_method_proxy(format)
    __bool__ = new_method_proxy(bool)
    __hash__ = new_method_proxy(hash)
    # Introspection support
    __dir__ = new_method_proxy(dir)
    __instancecheck__ = new_method_proxy(lambda target, instance: isinstance(instance, target))
    __subclasscheck__ = new_method_proxy(lambda target, subclass: issubclass(subclass, target))

    __eq__ = new_method_proxy(operator.eq)
    __ne__ = new_method_proxy(operator.ne)
    __gt__ = new_method_proxy(operator.gt)
    __lt__ = new_method_proxy(operator.lt)
    __ge__ = new_method_proxy(operator.ge)
    __le__ = new_method_proxy(operator.le)

    # Container support
    __getitem__ = new_method_proxy(operator.getitem)
    __setitem__ = new_method_proxy(operator.setitem)
    __delitem__ = new_method_proxy(operator.delitem)
    __len__ = new_method_proxy(len)
    __iter__ = new_method_proxy(iter)
    __reversed__ = new_method_proxy(reversed)
    __contains__ = new_method_proxy(operator.contains)

    __add__ = new_method_proxy(operator.add)
    __radd__ = new_method_proxy(_reflected(operator.add))
    __sub__ = new_method_proxy(operator.sub)
    __rsub__ = new_method_proxy(_reflected(operator.sub))
    __mul__ = new_method_proxy(operator.mul)
    __rmul__ = new_method_proxy(_reflected(operator.mul))
    __matmul__ = new_method_proxy(operator.matmul)
    __rmatmul__ = new_method_proxy(_reflected(operator.matmul))
    __truediv__ = new_method_proxy(operator.truediv)
    __rtruediv__ = new_method_proxy(_reflected(operator.truediv))
    __floordiv__ = new_method_proxy(operator.floordiv)
    __rfloordiv__ = new_method_proxy(_reflected(operator.floordiv))
    __mod__ = new_method_proxy(operator.mod)
    __rmod__ = new_method_proxy(_reflected(operator.mod))
    __divmod__ = new_method_proxy(divmod)
    __rdivmod__ = new_method_proxy(_reflected(divmod))
    __pow__ = new_method_proxy(pow)
    __rpow__ = new_method_proxy(_reflected(pow))
    __lshift__ = new_method_proxy(operator.lshift)
    __rlshift__ = new_method_proxy(_reflected(operator.lshift))
    __rshift__ = new_method_proxy(operator.rshift)
    __rrshift__ = new_method_proxy(_reflected(operator.rshift))
    __and__ = new_method_proxy(operator.and_)
    __rand__ = new_method_proxy(_reflected(operator.and_))
    __or__ = new_method_proxy(operator.or_)
    __ror__ = new_method_proxy(_reflected(operator.or_))
    __xor__ = new_method_proxy(operator.xor)
    __rxor__ = new_method_proxy(_reflected(operator.xor))

    __neg__ = new_method_proxy(operator.neg)
    __pos__ = new_method_proxy(operator.pos)
    __abs__ = new_method_proxy(operator.abs)
    __invert__ = new_method_proxy(operator.invert)

    # Numeric conversions
    __int__ = new_method_proxy(int)
    __float__ = new_method_proxy(float)
    __complex__ = new_method_proxy(complex)
    __index__ = new_method_proxy(operator.index)
    __round__ = new_method_proxy(round)
    __trunc__ = new_method_proxy(math.trunc)
    __floor__ = new_method_proxy(math.floor)
    __ceil__ = new_method_proxy(math.ceil)


def create_proxy(
    provider: t.Callable[[], TargetT],
    overrides: t.Optional[t.Mapping[t.Union[OperationKind, str], 'Handler']] = None,
    strict: t.Optional[bool] = None,
) -> TargetT:
    """Create a :class:`FreshProxy` over ``provider``.

    See :class:`FreshProxy` for the arguments.
    """
    return t.cast(TargetT, FreshProxy(provider, overrides = overrides, strict = strict))
