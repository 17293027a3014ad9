"""
AccrualOutcome value object - verdict returned by the accrual system.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccrualVerdict(str, Enum):
    """What the poller should do with an order after querying it."""

    PENDING = "pending"  # Not decided yet, keep PROCESSING
    INVALID = "invalid"
    PROCESSED = "processed"


@dataclass(frozen=True)
class AccrualOutcome:
    """
    Result of one accrual query.

    Business rules:
    - PROCESSED carries a non-negative accrual
    - PENDING and INVALID carry no accrual
    """

    verdict: AccrualVerdict
    accrual: Optional[Decimal] = None

    def __post_init__(self):
        """Validate outcome on creation."""
        if self.verdict == AccrualVerdict.PROCESSED:
            if self.accrual is None:
                raise ValueError("Processed outcome requires an accrual")
            if self.accrual < 0:
                raise ValueError("Accrual cannot be negative")
        elif self.accrual is not None:
            raise ValueError(f"{self.verdict.value} outcome carries no accrual")

    @classmethod
    def pending(cls) -> "AccrualOutcome":
        return cls(verdict=AccrualVerdict.PENDING)

    @classmethod
    def invalid(cls) -> "AccrualOutcome":
        return cls(verdict=AccrualVerdict.INVALID)

    @classmethod
    def processed(cls, accrual: Decimal) -> "AccrualOutcome":
        return cls(verdict=AccrualVerdict.PROCESSED, accrual=accrual)

    @property
    def is_terminal(self) -> bool:
        """True when the outcome finalizes the order."""
        return self.verdict != AccrualVerdict.PENDING
