"""Cache interfaces used by fraud rules."""

from abc import ABC, abstractmethod


class SeenIpStore(ABC):
    """
    Keyed memory of IP addresses already seen per customer.

    Owned by the caller and injected into rules, so rules stay stateless.
    Implementations must be safe to share between threads.
    """

    @abstractmethod
    def has_seen(self, customer_number: str, ip_address: str) -> bool:
        """Return True if the IP was seen for the customer and has not expired."""
        ...

    @abstractmethod
    def remember(self, customer_number: str, ip_address: str) -> None:
        """Record the IP for the customer, refreshing its expiry."""
        ...
