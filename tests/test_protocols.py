from __future__ import annotations

import copy
import math

from freshproxy import FreshProxy

from .fixtures import Endpoint, Primary, Replica


def test_container_protocols() -> None:
    registry = {'hosts': ['a', 'b']}
    proxy = FreshProxy(lambda: registry['hosts'])

    assert len(proxy) == 2
    assert list(proxy) == ['a', 'b']
    assert list(reversed(proxy)) == ['b', 'a']
    assert 'a' in proxy
    assert proxy[1] == 'b'

    proxy[0] = 'c'
    assert registry['hosts'] == ['c', 'b']
    del proxy[0]
    assert registry['hosts'] == ['b']

    registry['hosts'] = ['x', 'y', 'z']
    assert len(proxy) == 3
    assert 'a' not in proxy


def test_arithmetic_protocols() -> None:
    registry = {'value': 4}
    proxy = FreshProxy(lambda: registry['value'])

    assert proxy + 1 == 5
    assert 10 - proxy == 6
    assert proxy * 2 == 8
    assert 2 ** proxy == 16
    assert divmod(9, proxy) == (2, 1)
    assert -proxy == -4
    assert proxy | 1 == 5

    registry['value'] = 7
    assert 10 - proxy == 3


def test_comparison_and_hash() -> None:
    registry = {'value': 3}
    proxy = FreshProxy(lambda: registry['value'])

    assert proxy == 3
    assert proxy != 4
    assert proxy < 5 and proxy >= 3
    assert hash(proxy) == hash(3)

    registry['value'] = 9
    assert proxy > 5


def test_conversions() -> None:
    registry = {'value': 2.5}
    proxy = FreshProxy(lambda: registry['value'])

    assert str(proxy) == '2.5'
    assert repr(proxy) == '2.5'
    assert f'{proxy:.2f}' == '2.50'
    assert bool(proxy) is True
    assert int(proxy) == 2
    assert math.floor(proxy) == 2
    assert math.ceil(proxy) == 3
    assert round(proxy) == 2

    registry['value'] = 0
    assert bool(proxy) is False
    assert ['a', 'b'][FreshProxy(lambda: 1)] == 'b'


def test_isinstance_against_proxied_class() -> None:
    registry = {'cls': Primary}
    proxy = FreshProxy(lambda: registry['cls'])

    assert isinstance(Primary('a', 1), proxy)
    assert issubclass(Primary, proxy)

    registry['cls'] = Replica
    assert not isinstance(Primary('a', 1), proxy)


def test_copy_snapshots_current_target() -> None:
    registry = {'endpoint': Endpoint('a', 1)}
    proxy = FreshProxy(lambda: registry['endpoint'])

    shallow = copy.copy(proxy)
    deep = copy.deepcopy(proxy)

    assert type(shallow) is Endpoint and shallow is not registry['endpoint']
    assert deep.host == 'a'

    registry['endpoint'] = Endpoint('b', 2)
    assert shallow.host == 'a'


def test_dir_lists_target_attributes() -> None:
    proxy = FreshProxy(lambda: Endpoint('a', 1))

    assert {'host', 'port'} <= set(dir(proxy))
