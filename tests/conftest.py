"""Pytest fixtures for junkcheck tests."""

import ipaddress
import threading

import pytest

from junkcheck.blocklists import BlockListRegistry, BlockListService, build_blocklists
from junkcheck.cache import ResultCache
from junkcheck.checker import JunkChecker
from junkcheck.preferences import MemoryPreferences
from junkcheck.resolver import NameNotFound, Resolver, ResolverError


class FakeResolver(Resolver):
    """Resolver test double with call recording.

    hosts: host name -> list of address strings
    answers: query name -> list of address strings, or an exception instance
    Unknown names raise NameNotFound.
    """

    def __init__(self, hosts=None, answers=None):
        super().__init__()
        self.hosts = dict(hosts or {})
        self.answers = dict(answers or {})
        self.lookups: list[str] = []
        self.resolved: list[str] = []
        self._lock = threading.Lock()

    def _answer(self, table, name):
        value = table.get(name)
        if value is None:
            raise NameNotFound(name)
        if isinstance(value, Exception):
            raise value
        return [ipaddress.ip_address(v) for v in value]

    def lookup(self, name):
        with self._lock:
            self.lookups.append(name)
        return self._answer(self.answers, name)

    def resolve_addresses(self, host):
        with self._lock:
            self.resolved.append(host)
        return self._answer(self.hosts, host)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


TEST_SERVICES = [
    BlockListService(name="first", zone="bl.first.test", responses=["127.0.0.2"]),
    BlockListService(name="domains", zone="dbl.domains.test", numeric=False),
    BlockListService(
        name="second", zone="bl.second.test", enabled=False, responses=["127.0.0.2"]
    ),
]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ResultCache(expiry=3600, clock=clock)


@pytest.fixture
def preferences():
    return MemoryPreferences()


@pytest.fixture
def blocklists():
    return build_blocklists(TEST_SERVICES)


@pytest.fixture
def registry(preferences, cache, blocklists):
    return BlockListRegistry(preferences, cache, blocklists)


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def checker(registry, resolver, cache):
    return JunkChecker(registry, resolver, cache, max_workers=4)


@pytest.fixture
def lookup_error():
    return ResolverError("timed out")
