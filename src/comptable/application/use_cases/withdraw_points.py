"""
Withdraw Points use case.

Spends balance against a new order number.
CRITICAL: debit and history record share one transaction.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from comptable.domain.entities.withdrawal import Withdrawal
from comptable.domain.exceptions import (
    InsufficientFundsError,
    InvalidOrderNumberError,
    ValidationError,
)
from comptable.domain.repositories.i_account_repository import IAccountRepository
from comptable.domain.repositories.i_withdrawal_repository import (
    IWithdrawalRepository,
)
from comptable.domain.value_objects.order_number import OrderNumber
from comptable.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


class WithdrawPoints:
    """
    Withdraw points from a user's balance.

    Business rules:
    - Target order number must pass the Luhn check
    - Target order number is NOT looked up in the order ledger
    - Amount must be positive
    - Current balance must cover the amount, checked and debited atomically
    - Withdrawal record is written only when the debit succeeded

    Architecture:
    - Both repositories share the caller's session; the session context
      commits both writes or rolls back both
    """

    def __init__(
        self,
        account_repository: IAccountRepository,
        withdrawal_repository: IWithdrawalRepository,
    ):
        """
        Initialize use case with dependencies.

        Args:
            account_repository: Balance ledger
            withdrawal_repository: Withdrawal history
        """
        self.account_repository = account_repository
        self.withdrawal_repository = withdrawal_repository

    async def execute(
        self,
        login: str,
        order_number: str,
        amount: Decimal,
        now: Optional[datetime] = None,
    ) -> Withdrawal:
        """
        Execute withdrawal.

        Args:
            login: Withdrawing user
            order_number: Order the points are spent on
            amount: Points to spend
            now: Withdrawal timestamp (defaults to current UTC time)

        Returns:
            Created Withdrawal entity

        Raises:
            InvalidOrderNumberError: If order number fails validation
            ValidationError: If amount is not positive
            InsufficientFundsError: If balance is too low
        """
        # 1. Validate order number
        try:
            number = str(OrderNumber(order_number))
        except ValueError as e:
            metrics.withdrawals_total.labels(result="invalid_order").inc()
            raise InvalidOrderNumberError(order_number, str(e))

        # 2. Validate amount
        if amount <= 0:
            raise ValidationError("sum", "must be positive")

        # 3. Debit (atomic check-then-act in storage)
        if not await self.account_repository.debit(login, amount):
            metrics.withdrawals_total.labels(result="insufficient").inc()
            raise InsufficientFundsError(login, amount)

        # 4. Record withdrawal in the same transaction
        withdrawal = Withdrawal(
            order_number=number,
            owner=login,
            amount=amount,
            processed_at=now or datetime.now(timezone.utc),
        )
        created = await self.withdrawal_repository.create(withdrawal)

        logger.info(
            f"Withdrew {amount} points for order {number}",
            extra={"order_number": number, "login": login},
        )
        metrics.withdrawals_total.labels(result="ok").inc()

        return created
