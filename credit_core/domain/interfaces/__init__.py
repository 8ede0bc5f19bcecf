"""
Domain Interfaces (Ports)
"""

from .repositories import ApplicationRepository, StatusTransitionRepository
from .publishers import EventPublisher
from .caches import SeenIpStore

__all__ = [
    "ApplicationRepository",
    "StatusTransitionRepository",
    "EventPublisher",
    "SeenIpStore",
]
