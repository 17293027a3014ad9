"""
Domain value objects.
"""

from comptable.domain.value_objects.accrual_outcome import (
    AccrualOutcome,
    AccrualVerdict,
)
from comptable.domain.value_objects.order_number import OrderNumber, luhn_valid

__all__ = [
    "AccrualOutcome",
    "AccrualVerdict",
    "OrderNumber",
    "luhn_valid",
]
