from __future__ import annotations

"""Targets and helpers shared by the freshproxy tests."""

import typing as t

from freshproxy import OperationKind, PropertyDescriptor, reflect


class Sequenced:
    """Provider returning each target in turn, then repeating the last one."""

    def __init__(self, *targets: t.Any) -> None:
        self.targets = list(targets)
        self.calls = 0

    def __call__(self) -> t.Any:
        target = self.targets[min(self.calls, len(self.targets) - 1)]
        self.calls += 1
        return target


class Endpoint:
    def __init__(self, host: str, port: int) -> None:
        self.host = host
        self.port = port


class Primary(Endpoint):
    pass


class Replica(Endpoint):
    pass


class Promoted(Endpoint):
    pass


def make_target_class() -> type:
    """A new class every call, so destructive operations can repeat."""
    return type('Target', (), {'name': 'target', 'scratch': 1})


OPERATIONS: t.Dict[OperationKind, t.Callable[[t.Any], t.Any]] = {
    OperationKind.APPLY: lambda proxy: reflect.apply(proxy),
    OperationKind.CONSTRUCT: lambda proxy: reflect.construct(proxy),
    OperationKind.DEFINE_PROPERTY: lambda proxy: reflect.define_property(proxy, 'defined', PropertyDescriptor(value = 1)),
    OperationKind.DELETE_PROPERTY: lambda proxy: reflect.delete_property(proxy, 'scratch'),
    OperationKind.GET: lambda proxy: reflect.get(proxy, 'name'),
    OperationKind.GET_OWN_PROPERTY_DESCRIPTOR: lambda proxy: reflect.get_own_property_descriptor(proxy, 'name'),
    OperationKind.GET_PROTOTYPE_OF: reflect.get_prototype_of,
    OperationKind.HAS: lambda proxy: reflect.has(proxy, 'name'),
    OperationKind.IS_EXTENSIBLE: reflect.is_extensible,
    OperationKind.OWN_KEYS: reflect.own_keys,
    OperationKind.PREVENT_EXTENSIONS: reflect.prevent_extensions,
    OperationKind.SET: lambda proxy: reflect.set(proxy, 'name', 'renamed'),
    OperationKind.SET_PROTOTYPE_OF: lambda proxy: reflect.set_prototype_of(proxy, type),
}
