from __future__ import annotations

"""Core types shared by the proxy, its handlers and the reflective operations."""

import enum
import typing as t
from dataclasses import dataclass

TargetT = t.TypeVar('TargetT')

Provider = t.Callable[[], t.Any]
Handler = t.Callable[..., t.Any]


class Constant(tuple):
    """Pretty display helper for immutable sentinel values."""

    def __new__(cls, name):
        return tuple.__new__(cls, (name,))

    def __repr__(self):
        return f'{self[0]}'

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


EMPTY = Constant('EMPTY')


class OperationKind(str, enum.Enum):
    """The interceptable operations a proxy forwards to its current target."""

    APPLY = 'apply'
    CONSTRUCT = 'construct'
    DEFINE_PROPERTY = 'define_property'
    DELETE_PROPERTY = 'delete_property'
    GET = 'get'
    GET_OWN_PROPERTY_DESCRIPTOR = 'get_own_property_descriptor'
    GET_PROTOTYPE_OF = 'get_prototype_of'
    HAS = 'has'
    IS_EXTENSIBLE = 'is_extensible'
    OWN_KEYS = 'own_keys'
    PREVENT_EXTENSIONS = 'prevent_extensions'
    SET = 'set'
    SET_PROTOTYPE_OF = 'set_prototype_of'

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, key: t.Union['OperationKind', str]) -> 'OperationKind':
        """Coerce ``key`` (a member or its string value) into a member.

        Raises:
            ValueError: ``key`` names no recognised operation.
        """
        if isinstance(key, cls):
            return key
        if isinstance(key, str):
            return cls(key.lower())
        raise ValueError(f'{key!r} is not a valid {cls.__name__}')


@dataclass(frozen = True)
class PropertyDescriptor:
    """Describes one attribute as its owner stores it.

    A data descriptor carries ``value``. An accessor descriptor carries any of
    ``get``, ``set`` and ``delete`` and maps onto a :class:`property`.
    """

    value: t.Any = EMPTY
    get: t.Optional[t.Callable[[t.Any], t.Any]] = None
    set: t.Optional[t.Callable[[t.Any, t.Any], None]] = None
    delete: t.Optional[t.Callable[[t.Any], None]] = None
    doc: t.Optional[str] = None

    def __post_init__(self) -> None:
        if self.is_accessor and self.is_data:
            raise ValueError('A property descriptor cannot carry both a value and accessors')
        for name in ('get', 'set', 'delete'):
            func = getattr(self, name)
            if func is not None and not callable(func):
                raise TypeError(f'Descriptor `{name}` must be callable, got {func!r}')

    @property
    def is_accessor(self) -> bool:
        return self.get is not None or self.set is not None or self.delete is not None

    @property
    def is_data(self) -> bool:
        return self.value is not EMPTY

    @classmethod
    def from_property(cls, prop: property) -> 'PropertyDescriptor':
        """Describe an existing :class:`property` object."""
        return cls(get = prop.fget, set = prop.fset, delete = prop.fdel, doc = prop.__doc__)

    def to_property(self) -> property:
        """Build the :class:`property` this accessor descriptor stands for."""
        return property(self.get, self.set, self.delete, self.doc)


__all__ = [
    "TargetT",
    "Provider",
    "Handler",
    "Constant",
    "EMPTY",
    "OperationKind",
    "PropertyDescriptor",
]
