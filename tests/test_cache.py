from syllabix.utils.cache import BoundedLRUCache


def test_lru_eviction_respects_recent_reads():
    cache = BoundedLRUCache(2)
    cache.put("a", 1)
    cache.put("b", 2)

    assert cache.get("a") == 1
    cache.put("c", 3)

    assert "a" in cache
    assert "b" not in cache
    assert len(cache) == 2


def test_get_or_compute_only_calls_factory_on_miss():
    cache = BoundedLRUCache(4)
    calls = []

    def factory():
        calls.append(1)
        return "value"

    assert cache.get_or_compute("key", factory) == "value"
    assert cache.get_or_compute("key", factory) == "value"
    assert len(calls) == 1
    assert cache.stats() == {"size": 1, "capacity": 4, "hits": 1, "misses": 1}


def test_zero_capacity_stores_nothing():
    cache = BoundedLRUCache(0)
    cache.put("a", 1)

    assert len(cache) == 0
    assert cache.get("a") is None
    assert cache.get_or_compute("a", lambda: 5) == 5
    assert len(cache) == 0


def test_clear_resets_counters():
    cache = BoundedLRUCache(3)
    cache.put("a", 1)
    cache.get("a")
    cache.get("missing")

    cache.clear()

    assert cache.stats() == {"size": 0, "capacity": 3, "hits": 0, "misses": 0}
