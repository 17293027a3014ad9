"""
API schemas for orders.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from comptable.domain.entities.order import Order


class OrderResponse(BaseModel):
    """Response schema for one uploaded order."""

    number: str = Field(..., description="Order number")
    status: str = Field(
        ..., description="NEW, PROCESSING, INVALID or PROCESSED"
    )
    accrual: Optional[float] = Field(
        default=None,
        description="Points earned (PROCESSED orders only)",
    )
    uploaded_at: datetime = Field(..., description="Upload time (RFC3339)")

    @classmethod
    def from_entity(cls, order: Order) -> "OrderResponse":
        return cls(
            number=order.number,
            status=order.status.value,
            accrual=float(order.accrual) if order.accrual is not None else None,
            uploaded_at=order.uploaded_at,
        )
