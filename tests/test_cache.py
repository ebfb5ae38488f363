from src.weather_connectors import TTLCache, make_cache_key


class FakeClock:

    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def test_get_before_expiry():
    clock = FakeClock()
    cache = TTLCache(ttl_seconds=600, clock=clock)
    cache.set("new delhi", {"rainfall": 12})

    clock.now += 599
    assert cache.get("new delhi") == {"rainfall": 12}


def test_expired_entry_is_absent():
    clock = FakeClock()
    cache = TTLCache(ttl_seconds=600, clock=clock)
    cache.set("new delhi", "value")

    clock.now += 600
    assert cache.get("new delhi") is None


def test_missing_key():
    assert TTLCache().get("nowhere") is None


def test_explicit_timestamp():
    clock = FakeClock(now=5000.0)
    cache = TTLCache(ttl_seconds=600, clock=clock)
    cache.set("old", "value", timestamp=4000.0)
    assert cache.get("old") is None


def test_expired_entries_purged_on_write():
    clock = FakeClock()
    cache = TTLCache(ttl_seconds=10, clock=clock)
    cache.set("a", 1)
    clock.now += 20
    cache.set("b", 2)

    assert len(cache) == 1
    assert cache.get("b") == 2


def test_keys_are_independent():
    cache = TTLCache()
    cache.set("mumbai", 1)
    cache.set("chennai", 2)
    assert cache.get("mumbai") == 1
    assert cache.get("chennai") == 2

    cache.clear()
    assert len(cache) == 0


def test_make_cache_key():
    assert make_cache_key("New Delhi") == "new delhi"
    assert make_cache_key("New Delhi", 28.61391, 77.20902) == "28.61,77.21"
    assert make_cache_key("New Delhi", 28.61391, None) == "new delhi"
    assert make_cache_key(None) == ""
