"""
Submit Order use case.

Uploads an order number for accrual. Uploads are idempotent per user.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from comptable.domain.entities.order import Order, SubmissionResult
from comptable.domain.exceptions import (
    InvalidOrderNumberError,
    OrderOwnedByOtherUserError,
    ValidationError,
)
from comptable.domain.repositories.i_order_repository import IOrderRepository
from comptable.domain.value_objects.order_number import OrderNumber
from comptable.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


@dataclass
class SubmitOrderResult:
    """
    Result of an order upload.

    Attributes:
        order_number: Validated order number
        result: ACCEPTED for a new order, ALREADY_UPLOADED for a repeat
    """

    order_number: str
    result: SubmissionResult


class SubmitOrder:
    """
    Upload an order number on behalf of a user.

    Business rules:
    - Number must be digits only (ValidationError otherwise)
    - Number must pass the Luhn check (InvalidOrderNumberError otherwise)
    - A new number is stored as NEW and owned by the uploader
    - Re-uploading own number changes nothing
    - A number owned by someone else is rejected and ownership never moves

    Concurrency:
    - Uniqueness is decided by the storage primary key, so two users
      racing on the same number cannot both become owner
    """

    def __init__(self, order_repository: IOrderRepository):
        """
        Initialize use case with dependencies.

        Args:
            order_repository: Order ledger
        """
        self.order_repository = order_repository

    async def execute(
        self,
        login: str,
        raw_number: str,
        now: Optional[datetime] = None,
    ) -> SubmitOrderResult:
        """
        Execute order upload.

        Args:
            login: Uploading user
            raw_number: Order number as received
            now: Upload timestamp (defaults to current UTC time)

        Returns:
            SubmitOrderResult

        Raises:
            ValidationError: If number is empty or not all digits
            InvalidOrderNumberError: If number fails validation
            OrderOwnedByOtherUserError: If another user owns the number
        """
        # 1. Validate format
        if not raw_number or not raw_number.isascii() or not raw_number.isdigit():
            raise ValidationError("order_number", "must be a non-empty digit string")

        try:
            number = str(OrderNumber(raw_number))
        except ValueError as e:
            metrics.orders_submitted_total.labels(result="invalid").inc()
            raise InvalidOrderNumberError(raw_number, str(e))

        # 2. Try to claim the number
        order = Order(
            number=number,
            owner=login,
            uploaded_at=now or datetime.now(timezone.utc),
        )

        if await self.order_repository.insert_if_absent(order):
            logger.info(
                f"Order {number} accepted",
                extra={"order_number": number, "login": login},
            )
            metrics.orders_submitted_total.labels(result="accepted").inc()
            return SubmitOrderResult(number, SubmissionResult.ACCEPTED)

        # 3. Number already taken - by whom?
        existing = await self.order_repository.get_by_number(number)
        if existing is not None and existing.owner == login:
            metrics.orders_submitted_total.labels(result="already_uploaded").inc()
            return SubmitOrderResult(number, SubmissionResult.ALREADY_UPLOADED)

        metrics.orders_submitted_total.labels(result="conflict").inc()
        raise OrderOwnedByOtherUserError(number)
