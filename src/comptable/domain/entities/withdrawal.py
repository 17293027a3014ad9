"""
Withdrawal entity - points spent against an order number.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4


@dataclass(frozen=True)
class Withdrawal:
    """
    Immutable record of a successful withdrawal.

    The order number is a bookkeeping reference only; it is not
    required to exist in the order ledger.
    """

    order_number: str
    owner: str
    amount: Decimal
    id: UUID = field(default_factory=uuid4)
    processed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Validate withdrawal data after initialization."""
        if not self.order_number:
            raise ValueError("Order number is required")

        if not self.owner:
            raise ValueError("Withdrawal owner is required")

        if self.amount <= 0:
            raise ValueError("Withdrawal amount must be positive")
