"""Domain Exceptions - Business rule violations and domain errors."""

from .base import (
    DomainException,
    InvalidArgumentException,
    InvalidStateException,
    NotFoundException,
)
from .application import (
    ApplicationNotFoundException,
    ApplicationNotRefinanceableException,
    ApplicationOwnershipException,
    InvalidApplicationException,
    InvalidStatusTransitionException,
)
from .customer import UnknownCustomerCategoryException

__all__ = [
    "DomainException",
    "InvalidArgumentException",
    "InvalidStateException",
    "NotFoundException",
    "ApplicationNotFoundException",
    "ApplicationNotRefinanceableException",
    "ApplicationOwnershipException",
    "InvalidApplicationException",
    "InvalidStatusTransitionException",
    "UnknownCustomerCategoryException",
]
