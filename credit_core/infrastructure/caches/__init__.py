"""Cache implementations."""

from .seen_ip_store import InMemorySeenIpStore

__all__ = [
    "InMemorySeenIpStore",
]
