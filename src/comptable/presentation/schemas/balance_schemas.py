"""
API schemas for balance and withdrawals.

Request and response models for balance endpoints.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from comptable.domain.entities.account import Balance
from comptable.domain.entities.withdrawal import Withdrawal

# ================================================================
# Request Schemas
# ================================================================


class WithdrawRequest(BaseModel):
    """Request schema for spending points."""

    order: str = Field(
        ...,
        description="Order number the points are spent on",
        min_length=1,
        max_length=64,
    )
    sum: Decimal = Field(
        ...,
        description="Points to withdraw",
        gt=0,
        decimal_places=2,
    )


# ================================================================
# Response Schemas
# ================================================================


class BalanceResponse(BaseModel):
    """Response schema for current balance."""

    current: float = Field(..., description="Spendable points")
    withdrawn: float = Field(..., description="Points spent over account lifetime")

    @classmethod
    def from_entity(cls, balance: Balance) -> "BalanceResponse":
        return cls(current=float(balance.current), withdrawn=float(balance.withdrawn))


class WithdrawalResponse(BaseModel):
    """Response schema for one withdrawal."""

    order: str = Field(..., description="Order number")
    sum: float = Field(..., description="Points withdrawn")
    processed_at: datetime = Field(..., description="Withdrawal time (RFC3339)")

    @classmethod
    def from_entity(cls, withdrawal: Withdrawal) -> "WithdrawalResponse":
        return cls(
            order=withdrawal.order_number,
            sum=float(withdrawal.amount),
            processed_at=withdrawal.processed_at,
        )
