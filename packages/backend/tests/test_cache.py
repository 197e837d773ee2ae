"""Tests for the TTL cache."""

from core.cache import TTLCache


def test_get_before_expiry(clock):
    cache = TTLCache(60.0, clock=clock)
    cache.set("k", [1, 2])

    clock.advance(59)
    assert cache.get("k") == [1, 2]
    assert "k" in cache


def test_expired_entry_evicted_on_read(clock):
    cache = TTLCache(60.0, clock=clock)
    cache.set("k", "v")

    clock.advance(60)
    assert len(cache) == 1
    assert cache.get("k") is None
    assert len(cache) == 0


def test_per_entry_ttl(clock):
    cache = TTLCache(60.0, clock=clock)
    cache.set("short", "v", ttl=5)

    clock.advance(6)
    assert cache.get("short") is None


def test_set_replaces_and_restarts_ttl(clock):
    cache = TTLCache(60.0, clock=clock)
    cache.set("k", "old")
    clock.advance(50)
    cache.set("k", "new")
    clock.advance(50)

    assert cache.get("k") == "new"


def test_invalidate_and_clear(clock):
    cache = TTLCache(60.0, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)

    cache.invalidate("a")
    assert cache.get("a") is None

    cache.clear()
    assert len(cache) == 0
