from __future__ import annotations

import dataclasses

import pytest

from freshproxy import (
    FreshProxy,
    FreshProxyError,
    InvalidOverrideError,
    InvalidProviderError,
    OperationKind,
    reflect,
)

from .fixtures import OPERATIONS, Endpoint


class ProviderDown(RuntimeError):
    pass


@dataclasses.dataclass(frozen = True)
class Frozen:
    host: str


@pytest.mark.parametrize('kind', list(OperationKind), ids=str)
def test_provider_failure_propagates_unchanged(kind: OperationKind) -> None:
    error = ProviderDown('registry unavailable')

    def provider():
        raise error

    proxy = FreshProxy(provider)

    with pytest.raises(ProviderDown) as exc_info:
        OPERATIONS[kind](proxy)
    assert exc_info.value is error


def test_provider_failure_through_syntax() -> None:
    def provider():
        raise ProviderDown('registry unavailable')

    proxy = FreshProxy(provider)

    with pytest.raises(ProviderDown):
        proxy.host
    with pytest.raises(ProviderDown):
        proxy.host = 'example.org'
    with pytest.raises(ProviderDown):
        del proxy.host
    with pytest.raises(ProviderDown):
        proxy()
    with pytest.raises(ProviderDown):
        len(proxy)
    with pytest.raises(ProviderDown):
        str(proxy)


def test_provider_failure_leaves_targets_untouched() -> None:
    target = Endpoint('localhost', 8080)
    outcomes = iter([target, ProviderDown('flaky')])

    def provider():
        outcome = next(outcomes)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    proxy = FreshProxy(provider)
    proxy.port = 9090

    with pytest.raises(ProviderDown):
        proxy.port = 1

    assert target.port == 9090


def test_native_errors_propagate_unchanged() -> None:
    proxy = FreshProxy(lambda: Endpoint('localhost', 8080))

    with pytest.raises(AttributeError):
        proxy.missing
    with pytest.raises(AttributeError):
        del proxy.missing
    with pytest.raises(TypeError):
        proxy()
    with pytest.raises(TypeError):
        reflect.construct(proxy)


def test_frozen_target_rejects_assignment() -> None:
    proxy = FreshProxy(lambda: Frozen('localhost'))

    with pytest.raises(dataclasses.FrozenInstanceError):
        proxy.host = 'example.org'


def test_falsy_handler_results_raise_at_the_syntax_level() -> None:
    proxy = FreshProxy(
        lambda: Endpoint('localhost', 8080),
        overrides = {
            'set': lambda provider, name, value, receiver: False,
            'delete_property': lambda provider, name: False,
            'set_prototype_of': lambda provider, prototype: False,
        },
    )

    with pytest.raises(AttributeError, match = 'cannot set attribute'):
        proxy.host = 'example.org'
    with pytest.raises(AttributeError, match = 'cannot delete attribute'):
        del proxy.host
    with pytest.raises(TypeError, match = 'was rejected'):
        proxy.__class__ = Endpoint


def test_invalid_provider() -> None:
    with pytest.raises(InvalidProviderError) as exc_info:
        FreshProxy(Endpoint('localhost', 8080))

    assert isinstance(exc_info.value, TypeError)
    assert isinstance(exc_info.value, FreshProxyError)
    assert isinstance(exc_info.value.provider, Endpoint)


def test_error_hierarchy() -> None:
    assert issubclass(InvalidOverrideError, FreshProxyError)
    assert issubclass(InvalidOverrideError, TypeError)
    assert issubclass(InvalidProviderError, TypeError)
