"""Data Transfer Objects for application layer."""

from .submission import ApplicationSubmission
from .decision import DecisionResult
from .tracking import APPLICATION_RECEIVED, StageHistoryEntry

__all__ = [
    "ApplicationSubmission",
    "DecisionResult",
    "APPLICATION_RECEIVED",
    "StageHistoryEntry",
]
