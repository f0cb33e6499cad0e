"""
TTLCache 테스트
"""
import pytest

from matchcare.services.ttl_cache import TTLCache
from tests.conftest import FakeClock


def test_set_and_get():
    cache = TTLCache(max_size=10, default_ttl=60, clock=FakeClock())
    cache.set("a", 1)

    assert cache.get("a") == 1
    assert cache.get("missing") is None
    assert cache.get("missing", "default") == "default"
    assert "a" in cache
    assert len(cache) == 1


def test_entry_expires_after_ttl():
    clock = FakeClock()
    cache = TTLCache(max_size=10, default_ttl=10, clock=clock)
    cache.set("a", "value")

    clock.advance(9.9)
    assert cache.get("a") == "value"

    clock.advance(0.2)
    assert cache.get("a") is None
    assert "a" not in cache
    assert cache.get_cache_info()["expired_entries"] == 1


def test_per_entry_ttl_overrides_default():
    clock = FakeClock()
    cache = TTLCache(max_size=10, default_ttl=100, clock=clock)
    cache.set("short", 1, ttl=5)
    cache.set("long", 2)

    clock.advance(6)
    assert cache.get("short") is None
    assert cache.get("long") == 2


def test_lru_eviction():
    cache = TTLCache(max_size=2, default_ttl=60, clock=FakeClock())
    cache.set("a", 1)
    cache.set("b", 2)
    cache.get("a")
    cache.set("c", 3)

    assert cache.get("b") is None
    assert cache.get("a") == 1
    assert cache.get("c") == 3
    assert cache.get_cache_info()["evictions"] == 1


def test_get_or_set_calls_factory_once():
    cache = TTLCache(max_size=10, default_ttl=60, clock=FakeClock())
    calls = []

    def factory():
        calls.append(1)
        return frozenset({"x"})

    assert cache.get_or_set("k", factory) == frozenset({"x"})
    assert cache.get_or_set("k", factory) == frozenset({"x"})
    assert len(calls) == 1


def test_get_or_set_caches_falsy_values():
    cache = TTLCache(max_size=10, default_ttl=60, clock=FakeClock())
    calls = []

    def factory():
        calls.append(1)
        return frozenset()

    cache.get_or_set("empty", factory)
    cache.get_or_set("empty", factory)
    assert len(calls) == 1


def test_clear_and_stats():
    cache = TTLCache(max_size=10, default_ttl=60, clock=FakeClock())
    cache.set("a", 1)
    cache.set("b", 2)
    cache.get("a")
    cache.get("zzz")

    info = cache.get_cache_info()
    assert info["cache_hits"] == 1
    assert info["cache_misses"] == 1
    assert info["hit_rate"] == 50.0

    assert cache.clear() == 2
    assert len(cache) == 0


def test_cleanup_expired():
    clock = FakeClock()
    cache = TTLCache(max_size=10, default_ttl=10, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2, ttl=100)

    clock.advance(20)
    assert cache.cleanup_expired() == 1
    assert len(cache) == 1


def test_invalid_max_size():
    with pytest.raises(ValueError):
        TTLCache(max_size=0)
