"""Data transfer objects for application tracking."""

from dataclasses import dataclass
from datetime import datetime

APPLICATION_RECEIVED = "APPLICATION_RECEIVED"


@dataclass(frozen=True)
class StageHistoryEntry:
    """One stage in an application's timeline."""

    stage: str
    description: str
    occurred_at: datetime
    actor: str = "system"
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "stage": self.stage,
            "description": self.description,
            "occurred_at": self.occurred_at.isoformat() + "Z",
            "actor": self.actor,
            "notes": self.notes,
        }
