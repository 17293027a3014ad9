"""Domain entities."""

from comptable.domain.entities.account import Account, Balance
from comptable.domain.entities.order import (
    PENDING_STATUSES,
    Order,
    OrderStatus,
    SubmissionResult,
)
from comptable.domain.entities.withdrawal import Withdrawal

__all__ = [
    "Account",
    "Balance",
    "Order",
    "OrderStatus",
    "PENDING_STATUSES",
    "SubmissionResult",
    "Withdrawal",
]
