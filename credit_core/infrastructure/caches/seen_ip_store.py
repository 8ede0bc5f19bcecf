"""In-process, bounded implementation of SeenIpStore."""

import threading
import time
from collections import OrderedDict
from typing import Callable, Tuple

from credit_core.core.config import settings
from credit_core.domain.interfaces import SeenIpStore


class InMemorySeenIpStore(SeenIpStore):
    """
    Thread-safe (customer, ip) memory with TTL and a size cap.

    Entries expire ttl_seconds after they were last remembered. When
    the cap is reached the least recently remembered entry is evicted.
    """

    def __init__(
        self,
        ttl_seconds: float | None = None,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl_seconds if ttl_seconds is not None else settings.seen_ip_ttl_seconds
        self._max_entries = max_entries or settings.seen_ip_max_entries
        self._clock = clock
        self._entries: "OrderedDict[Tuple[str, str], float]" = OrderedDict()
        self._lock = threading.Lock()

    def has_seen(self, customer_number: str, ip_address: str) -> bool:
        key = (customer_number, ip_address)
        with self._lock:
            expires_at = self._entries.get(key)
            if expires_at is None:
                return False
            if expires_at <= self._clock():
                del self._entries[key]
                return False
            return True

    def remember(self, customer_number: str, ip_address: str) -> None:
        key = (customer_number, ip_address)
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = self._clock() + self._ttl
            self._evict()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _evict(self) -> None:
        # Caller holds the lock
        now = self._clock()
        expired = [key for key, expires_at in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]

        while len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)
