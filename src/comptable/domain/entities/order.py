"""
Order entity - Domain model for uploaded purchase orders.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional


class OrderStatus(str, Enum):
    """Order lifecycle states."""

    NEW = "NEW"
    PROCESSING = "PROCESSING"
    INVALID = "INVALID"
    PROCESSED = "PROCESSED"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.INVALID, OrderStatus.PROCESSED)


PENDING_STATUSES = tuple(s for s in OrderStatus if not s.is_terminal)


class SubmissionResult(str, Enum):
    """Outcome of uploading an order number."""

    ACCEPTED = "accepted"
    ALREADY_UPLOADED = "already_uploaded"


@dataclass
class Order:
    """
    Order entity representing an uploaded order number.

    Business rules:
    - Order number is unique across all users
    - Owner never changes after upload
    - Status transitions: NEW → PROCESSING → PROCESSED or INVALID,
      applied by conditional updates in the order repository
    - PROCESSED and INVALID are final
    - Only PROCESSED orders carry an accrual
    """

    number: str
    owner: str
    status: OrderStatus = field(default=OrderStatus.NEW)
    accrual: Optional[Decimal] = field(default=None)
    uploaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Validate order data after initialization."""
        if not self.number:
            raise ValueError("Order number is required")

        if not self.owner:
            raise ValueError("Order owner is required")

        if self.accrual is not None:
            if self.status != OrderStatus.PROCESSED:
                raise ValueError("Only processed orders carry an accrual")
            if self.accrual < 0:
                raise ValueError("Accrual cannot be negative")
