from __future__ import annotations

"""Reflective operations on arbitrary Python objects.

One function per :class:`~freshproxy.types.OperationKind`. Each performs the
operation natively against a plain object. Handed a proxy, it dispatches into
that proxy's handler table instead, so ``reflect.own_keys(proxy)`` runs the
proxy's ``own_keys`` handler exactly as ``getattr(proxy, name)`` runs its
``get`` handler.

Python objects have no extensibility flag. ``is_extensible`` reports whether
an object can gain attributes it has not declared (an instance ``__dict__``,
or a mutable class), and ``prevent_extensions`` only reports success for
objects that already cannot.
"""

import inspect
import types
import typing as t

from .base import dispatch, is_proxy
from .types import EMPTY, OperationKind, PropertyDescriptor

# CPython type flags
_TPFLAGS_IMMUTABLETYPE = 1 << 8
_TPFLAGS_HEAPTYPE = 1 << 9


def _instance_dict(obj: t.Any) -> t.Optional[t.Dict[str, t.Any]]:
    """Return the writable instance namespace of ``obj`` if it has one."""
    try:
        namespace = object.__getattribute__(obj, '__dict__')
    except AttributeError:
        return None
    return namespace if isinstance(namespace, dict) else None


def _static_lookup(cls: type, name: str) -> t.Any:
    """Find ``name`` along the MRO of ``cls`` without invoking descriptors."""
    for klass in cls.__mro__:
        namespace = vars(klass)
        if name in namespace:
            return namespace[name]
    return EMPTY


def _slot_members(cls: type) -> t.Iterator[t.Tuple[str, t.Any]]:
    """Yield ``(attribute name, member descriptor)`` for every declared slot."""
    for klass in cls.__mro__:
        slots = vars(klass).get('__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in {'__dict__', '__weakref__'}:
                continue
            if slot.startswith('__') and not slot.endswith('__'):
                slot = f"_{klass.__name__.lstrip('_')}{slot}"
            member = vars(klass).get(slot)
            if member is not None and hasattr(member, '__get__'):
                yield slot, member


def _filled_slots(obj: t.Any) -> t.Iterator[t.Tuple[str, t.Any]]:
    """Yield ``(name, value)`` for the slots of ``obj`` that hold a value."""
    cls = type(obj)
    for slot, member in _slot_members(cls):
        try:
            yield slot, member.__get__(obj, cls)
        except AttributeError:
            continue


def _is_data_descriptor(attr: t.Any) -> bool:
    cls = type(attr)
    return hasattr(cls, '__set__') or hasattr(cls, '__delete__')


def _is_declared(obj: t.Any, name: str) -> bool:
    if get_own_property_descriptor(obj, name) is not None:
        return True
    return any(slot == name for slot, _ in _slot_members(type(obj)))


def apply(obj: t.Any, args: t.Sequence[t.Any] = (), kwargs: t.Optional[t.Mapping[str, t.Any]] = None) -> t.Any:
    """Call ``obj`` with ``args`` and ``kwargs``."""
    if is_proxy(obj):
        return dispatch(obj, OperationKind.APPLY, tuple(args), dict(kwargs or {}))
    return obj(*args, **(kwargs or {}))


def construct(obj: t.Any, args: t.Sequence[t.Any] = (), kwargs: t.Optional[t.Mapping[str, t.Any]] = None) -> t.Any:
    """Create a new instance of the class ``obj``.

    Raises:
        TypeError: ``obj`` is not a class.
    """
    if is_proxy(obj):
        return dispatch(obj, OperationKind.CONSTRUCT, tuple(args), dict(kwargs or {}))
    if not isinstance(obj, type):
        raise TypeError(f'{obj!r} is not a class')
    return obj(*args, **(kwargs or {}))


def define_property(obj: t.Any, name: str, descriptor: PropertyDescriptor) -> bool:
    """Define ``name`` on ``obj`` from ``descriptor`` without running ``__setattr__``.

    Data descriptors store their value in the instance namespace, a declared
    slot, or the class namespace when ``obj`` is a class. Accessor descriptors
    become a :class:`property`, which only a class can own.

    Returns:
        ``False`` when the attribute could not be defined: ``obj`` is not
        extensible and does not declare ``name``, an accessor was given for an
        instance, or a data descriptor on the class (such as a
        :class:`property`) owns ``name`` and would hide the stored value.
    """
    if is_proxy(obj):
        return dispatch(obj, OperationKind.DEFINE_PROPERTY, name, descriptor)
    if not isinstance(descriptor, PropertyDescriptor):
        raise TypeError(f'Expected a PropertyDescriptor, got {type(descriptor).__name__}')
    if not is_extensible(obj) and not _is_declared(obj, name):
        return False

    if isinstance(obj, type):
        value = descriptor.to_property() if descriptor.is_accessor else descriptor.value
        type.__setattr__(obj, name, None if value is EMPTY else value)
        return True
    if descriptor.is_accessor:
        return False

    value = None if descriptor.value is EMPTY else descriptor.value
    if any(slot == name for slot, _ in _slot_members(type(obj))):
        object.__setattr__(obj, name, value)
        return True
    if _is_data_descriptor(_static_lookup(type(obj), name)):
        # class-level data descriptors shadow the instance namespace
        return False
    namespace = _instance_dict(obj)
    if namespace is None:
        return False
    namespace[name] = value
    return True


def delete_property(obj: t.Any, name: str) -> bool:
    """Delete ``name`` from ``obj``."""
    if is_proxy(obj):
        return dispatch(obj, OperationKind.DELETE_PROPERTY, name)
    delattr(obj, name)
    return True


def get(obj: t.Any, name: str, receiver: t.Any = None) -> t.Any:
    """Read ``name`` from ``obj``.

    When ``receiver`` is given and is not ``obj``, a :class:`property` found on
    the type of ``obj`` runs its getter against ``receiver``. Every other
    attribute, methods included, binds to ``obj``.
    """
    if is_proxy(obj):
        return dispatch(obj, OperationKind.GET, name, obj if receiver is None else receiver)
    if receiver is not None and receiver is not obj:
        attr = _static_lookup(type(obj), name)
        if isinstance(attr, property):
            if attr.fget is None:
                raise AttributeError(f"property {name!r} of {type(obj).__name__!r} object has no getter")
            return attr.fget(receiver)
    return getattr(obj, name)


def get_own_property_descriptor(obj: t.Any, name: str) -> t.Optional[PropertyDescriptor]:
    """Describe ``name`` as ``obj`` itself stores it, or ``None`` if it does not."""
    if is_proxy(obj):
        return dispatch(obj, OperationKind.GET_OWN_PROPERTY_DESCRIPTOR, name)
    if isinstance(obj, type):
        namespace = vars(obj)
        if name not in namespace:
            return None
        raw = namespace[name]
        if isinstance(raw, property):
            return PropertyDescriptor.from_property(raw)
        return PropertyDescriptor(value = raw)

    namespace = _instance_dict(obj)
    if namespace is not None and name in namespace:
        return PropertyDescriptor(value = namespace[name])
    for slot, value in _filled_slots(obj):
        if slot == name:
            return PropertyDescriptor(value = value)
    return None


def get_prototype_of(obj: t.Any) -> type:
    """Return the class ``obj`` is an instance of."""
    if is_proxy(obj):
        return dispatch(obj, OperationKind.GET_PROTOTYPE_OF)
    return type(obj)


def has(obj: t.Any, name: str) -> bool:
    """Whether ``obj`` has ``name``, inherited attributes included.

    The lookup is static, so property getters do not run. Objects whose class
    defines ``__getattr__`` can answer for names no namespace holds, and are
    asked through :func:`hasattr` instead.
    """
    if is_proxy(obj):
        return dispatch(obj, OperationKind.HAS, name)
    if _static_lookup(type(obj), '__getattr__') is not EMPTY:
        return hasattr(obj, name)
    try:
        attr = inspect.getattr_static(obj, name)
    except AttributeError:
        return False
    if isinstance(attr, types.MemberDescriptorType) and not isinstance(obj, type):
        # an empty slot is declared but holds nothing
        try:
            attr.__get__(obj, type(obj))
        except AttributeError:
            return False
    return True


def is_extensible(obj: t.Any) -> bool:
    """Whether ``obj`` can gain attributes it does not already declare."""
    if is_proxy(obj):
        return dispatch(obj, OperationKind.IS_EXTENSIBLE)
    if isinstance(obj, type):
        flags = obj.__flags__
        return bool(flags & _TPFLAGS_HEAPTYPE) and not flags & _TPFLAGS_IMMUTABLETYPE
    return _instance_dict(obj) is not None


def own_keys(obj: t.Any) -> t.List[str]:
    """List the attribute names ``obj`` owns, in definition order."""
    if is_proxy(obj):
        return dispatch(obj, OperationKind.OWN_KEYS)
    if isinstance(obj, type):
        return list(vars(obj))
    namespace = _instance_dict(obj)
    keys = list(namespace) if namespace is not None else []
    for slot, _ in _filled_slots(obj):
        if slot not in keys:
            keys.append(slot)
    return keys


def prevent_extensions(obj: t.Any) -> bool:
    """Report whether ``obj`` is closed to new attributes.

    Python offers no way to seal an existing object, so nothing is changed:
    the result is ``True`` only for objects that are already non-extensible.
    """
    if is_proxy(obj):
        return dispatch(obj, OperationKind.PREVENT_EXTENSIONS)
    return not is_extensible(obj)


def set(obj: t.Any, name: str, value: t.Any, receiver: t.Any = None) -> bool:
    """Write ``value`` to ``name`` on ``obj``.

    A :class:`property` found on the type of ``obj`` runs its setter against
    ``receiver`` when one is given, mirroring :func:`get`.
    """
    if is_proxy(obj):
        return dispatch(obj, OperationKind.SET, name, value, obj if receiver is None else receiver)
    if receiver is not None and receiver is not obj:
        attr = _static_lookup(type(obj), name)
        if isinstance(attr, property):
            if attr.fset is None:
                raise AttributeError(f"property {name!r} of {type(obj).__name__!r} object has no setter")
            attr.fset(receiver, value)
            return True
    setattr(obj, name, value)
    return True


def set_prototype_of(obj: t.Any, prototype: type) -> bool:
    """Make ``obj`` an instance of ``prototype`` by assigning ``__class__``.

    Raises:
        TypeError: ``prototype`` is not a class.

    Returns:
        ``False`` when Python refuses the assignment, e.g. because the object
        layouts of the two classes differ.
    """
    if is_proxy(obj):
        return dispatch(obj, OperationKind.SET_PROTOTYPE_OF, prototype)
    if not isinstance(prototype, type):
        raise TypeError(f'prototype must be a class, not {type(prototype).__name__}')
    if type(obj) is prototype:
        return True
    try:
        object.__setattr__(obj, '__class__', prototype)
    except TypeError:
        return False
    return True


__all__ = [
    "apply",
    "construct",
    "define_property",
    "delete_property",
    "get",
    "get_own_property_descriptor",
    "get_prototype_of",
    "has",
    "is_extensible",
    "own_keys",
    "prevent_extensions",
    "set",
    "set_prototype_of",
]
