"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from credit_core.domain.entities import (
    ApplicationStatus,
    CreditApplication,
    StatusTransition,
)


class ApplicationRepository(ABC):
    """
    Abstract repository for CreditApplication persistence.

    Implementations only flush; committing is the caller's transaction.
    """

    @abstractmethod
    async def save(self, application: CreditApplication) -> CreditApplication:
        """
        Insert or update an application.

        Args:
            application: The application to save

        Returns:
            The saved application
        """
        ...

    @abstractmethod
    async def get_by_id(self, application_id: UUID) -> Optional[CreditApplication]:
        """
        Retrieve an application by ID, including soft-deleted ones.

        Args:
            application_id: The application's unique identifier

        Returns:
            The application if found, None otherwise
        """
        ...

    @abstractmethod
    async def get_by_customer_and_status(
        self,
        customer_number: str,
        status: ApplicationStatus,
    ) -> List[CreditApplication]:
        """
        Retrieve a customer's non-deleted applications in one status.

        Args:
            customer_number: The owning customer's number
            status: Status to filter on

        Returns:
            Matching applications, oldest first
        """
        ...

    @abstractmethod
    async def get_by_customer(self, customer_number: str) -> List[CreditApplication]:
        """
        Retrieve all non-deleted applications of a customer.

        Args:
            customer_number: The owning customer's number

        Returns:
            The customer's applications, oldest first
        """
        ...

    @abstractmethod
    async def get_by_status(self, status: ApplicationStatus) -> List[CreditApplication]:
        """
        Retrieve all non-deleted applications in one status.

        Args:
            status: Status to filter on

        Returns:
            Matching applications, oldest first
        """
        ...

    @abstractmethod
    async def get_open_updated_before(self, threshold: datetime) -> List[CreditApplication]:
        """
        Retrieve non-deleted, non-terminal applications last updated before a point in time.

        Args:
            threshold: Applications updated at or after this are excluded

        Returns:
            Stale applications, least recently updated first
        """
        ...

    @abstractmethod
    async def get_all(self) -> List[CreditApplication]:
        """
        Retrieve every application, including soft-deleted ones.

        Used for portfolio scans.
        """
        ...


class StatusTransitionRepository(ABC):
    """
    Abstract append-only store of application status transitions.
    """

    @abstractmethod
    async def append(self, transition: StatusTransition) -> StatusTransition:
        """
        Append a transition to the log.

        Args:
            transition: The transition to record

        Returns:
            The recorded transition
        """
        ...

    @abstractmethod
    async def get_by_application_id(self, application_id: UUID) -> List[StatusTransition]:
        """
        Retrieve an application's transitions in the order they occurred.

        Args:
            application_id: The application's unique identifier

        Returns:
            Transitions ordered by occurred_at ascending
        """
        ...
