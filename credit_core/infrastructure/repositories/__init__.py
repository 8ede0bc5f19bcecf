"""Repository implementations."""

from .application_repository import SqlAlchemyApplicationRepository
from .transition_repository import SqlAlchemyStatusTransitionRepository

__all__ = [
    "SqlAlchemyApplicationRepository",
    "SqlAlchemyStatusTransitionRepository",
]
