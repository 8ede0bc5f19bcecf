"""Data transfer objects for credit decisions."""

from dataclasses import dataclass

from credit_core.domain.entities import CreditApplication, CustomerCategory


@dataclass(frozen=True)
class DecisionResult:
    """Outcome of processing an application end to end."""

    application: CreditApplication
    credit_score: int
    category: CustomerCategory

    def to_dict(self) -> dict:
        return {
            "application": self.application.to_dict(),
            "credit_score": self.credit_score,
            "category": self.category.value,
        }
