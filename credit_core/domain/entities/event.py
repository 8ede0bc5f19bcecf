"""Credit events emitted to downstream subscribers."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4


class CreditEventType(str, Enum):
    """Types of credit events."""

    APPLICATION_APPROVED = "application_approved"
    APPLICATION_REJECTED = "application_rejected"
    STATUS_CHANGED = "status_changed"
    CREDIT_REFINANCED = "credit_refinanced"


@dataclass(frozen=True)
class CreditEvent:
    """
    An opaque decision outcome handed to the event publisher.

    The payload is already serializable; delivery is the publisher's job.
    """

    event_type: CreditEventType
    payload: dict[str, Any]
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "event_id": str(self.id),
            "event": self.event_type.value,
            "payload": self.payload,
            "created_at": self.created_at.isoformat() + "Z",
        }
