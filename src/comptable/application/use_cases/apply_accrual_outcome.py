"""
Apply Accrual Outcome use case.

Finalizes an order and credits its owner as one unit of work.
"""

from comptable.domain.repositories.i_account_repository import IAccountRepository
from comptable.domain.repositories.i_order_repository import IOrderRepository
from comptable.domain.value_objects.accrual_outcome import (
    AccrualOutcome,
    AccrualVerdict,
)
from comptable.infrastructure.monitoring import metrics


class ApplyAccrualOutcome:
    """
    Write a final accrual verdict to an order.

    Business rules:
    - Pending outcomes change nothing
    - Final orders are never overwritten (late results are ignored)
    - PROCESSED credits the owner by the accrual, in the same transaction
      as the status change
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        account_repository: IAccountRepository,
    ):
        """
        Initialize use case with dependencies.

        Args:
            order_repository: Order ledger
            account_repository: Balance ledger (same session)
        """
        self.order_repository = order_repository
        self.account_repository = account_repository

    async def execute(self, order_number: str, outcome: AccrualOutcome) -> bool:
        """
        Execute outcome application.

        Args:
            order_number: Order to finalize
            outcome: Verdict from accrual system

        Returns:
            True if the order was finalized by this call
        """
        if not outcome.is_terminal:
            return False

        if not await self.order_repository.finalize(order_number, outcome):
            return False

        if outcome.verdict == AccrualVerdict.PROCESSED and outcome.accrual:
            order = await self.order_repository.get_by_number(order_number)
            await self.account_repository.credit(order.owner, outcome.accrual)

        metrics.order_outcomes_applied_total.labels(
            status=outcome.verdict.value
        ).inc()
        return True
