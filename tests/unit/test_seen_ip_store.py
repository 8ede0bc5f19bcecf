"""Unit tests for the bounded seen-IP store."""

import threading

from credit_core.infrastructure.caches import InMemorySeenIpStore


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestInMemorySeenIpStore:
    """Tests for InMemorySeenIpStore."""

    def test_remember_then_seen(self):
        store = InMemorySeenIpStore(ttl_seconds=60, max_entries=10)

        assert store.has_seen("C-1", "10.0.0.1") is False
        store.remember("C-1", "10.0.0.1")
        assert store.has_seen("C-1", "10.0.0.1") is True
        assert store.has_seen("C-2", "10.0.0.1") is False

    def test_entries_expire(self):
        clock = FakeClock()
        store = InMemorySeenIpStore(ttl_seconds=60, max_entries=10, clock=clock)
        store.remember("C-1", "10.0.0.1")

        clock.now += 59
        assert store.has_seen("C-1", "10.0.0.1") is True

        clock.now += 1
        assert store.has_seen("C-1", "10.0.0.1") is False
        assert len(store) == 0

    def test_remember_refreshes_expiry(self):
        clock = FakeClock()
        store = InMemorySeenIpStore(ttl_seconds=60, max_entries=10, clock=clock)
        store.remember("C-1", "10.0.0.1")

        clock.now += 50
        store.remember("C-1", "10.0.0.1")
        clock.now += 50

        assert store.has_seen("C-1", "10.0.0.1") is True

    def test_size_bounded_evicts_oldest(self):
        store = InMemorySeenIpStore(ttl_seconds=60, max_entries=2)

        store.remember("C-1", "10.0.0.1")
        store.remember("C-1", "10.0.0.2")
        store.remember("C-1", "10.0.0.3")

        assert len(store) == 2
        assert store.has_seen("C-1", "10.0.0.1") is False
        assert store.has_seen("C-1", "10.0.0.3") is True

    def test_concurrent_remember(self):
        store = InMemorySeenIpStore(ttl_seconds=60, max_entries=500)

        def worker(customer: str):
            for i in range(100):
                store.remember(customer, f"10.0.0.{i}")

        threads = [threading.Thread(target=worker, args=(f"C-{n}",)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store) == 500
