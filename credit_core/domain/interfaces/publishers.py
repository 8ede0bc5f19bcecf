"""Event publisher interface."""

from abc import ABC, abstractmethod

from credit_core.domain.entities import CreditEvent


class EventPublisher(ABC):
    """
    Abstract publisher for credit decision outcomes.

    The delivery mechanism (webhook, queue, e-mail fan-out) is up to
    the implementation.
    """

    @abstractmethod
    async def publish(self, event: CreditEvent) -> bool:
        """
        Publish a credit event.

        Args:
            event: The event to deliver

        Returns:
            True if the event was delivered successfully

        Note:
            Implementations must not raise on delivery failure; a
            decision is never rolled back because an event was lost.
        """
        ...
