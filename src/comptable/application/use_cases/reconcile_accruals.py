"""
Reconcile Accruals use case.

One reconciliation tick: ask the accrual system about every pending
order and write back final verdicts.
"""

from dataclasses import dataclass, field
from typing import AsyncContextManager, Callable

from comptable.application.use_cases.apply_accrual_outcome import (
    ApplyAccrualOutcome,
)
from comptable.domain.entities.order import OrderStatus
from comptable.domain.exceptions import AccrualServiceError
from comptable.domain.repositories.i_account_repository import IAccountRepository
from comptable.domain.repositories.i_order_repository import IOrderRepository
from comptable.domain.services.i_accrual_client import IAccrualClient
from comptable.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


@dataclass
class LedgerRepositories:
    """Repositories bound to one database transaction."""

    orders: IOrderRepository
    accounts: IAccountRepository


LedgerScope = Callable[[], AsyncContextManager[LedgerRepositories]]


@dataclass
class ReconciliationReport:
    """
    Counters for one tick.

    Attributes:
        finalized: Orders moved to PROCESSED or INVALID
        pending: Orders the accrual system has not decided yet
        failed: Orders skipped because of an error (retried next tick)
        started: NEW orders moved to PROCESSING this tick
    """

    finalized: int = 0
    pending: int = 0
    failed: int = 0
    started: int = 0
    failed_orders: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.finalized + self.pending + self.failed


class ReconcileAccruals:
    """
    Run one reconciliation pass.

    Order of work:
    1. PROCESSING orders: query and apply
    2. NEW orders: mark PROCESSING (committed), then query and apply

    Business rules:
    - Each order's outcome is applied in its own transaction
    - A failure for one order is logged and does not stop the batch
    - No transaction is held open while waiting on the accrual system
    - Rate limiting and open circuit abort the pass; untouched orders
      keep their status and are picked up by a later pass
    """

    def __init__(self, ledger_scope: LedgerScope, accrual_client: IAccrualClient):
        """
        Initialize use case with dependencies.

        Args:
            ledger_scope: Factory of transactional repository scopes
            accrual_client: Accrual system client
        """
        self.ledger_scope = ledger_scope
        self.accrual_client = accrual_client

    async def execute(self) -> ReconciliationReport:
        """
        Execute one reconciliation pass.

        Returns:
            ReconciliationReport for the pass

        Raises:
            AccrualRateLimitedError: If accrual system throttles us
        """
        report = ReconciliationReport()

        # 1. Orders already handed to the accrual system
        async with self.ledger_scope() as repos:
            processing = await repos.orders.list_numbers_by_status(
                OrderStatus.PROCESSING
            )
        metrics.pending_orders.labels(status=OrderStatus.PROCESSING.value).set(
            len(processing)
        )
        await self._reconcile_batch(processing, report)

        # 2. Fresh uploads - claim them before asking
        async with self.ledger_scope() as repos:
            new = await repos.orders.list_numbers_by_status(OrderStatus.NEW)
            report.started = await repos.orders.mark_processing(new)
        metrics.pending_orders.labels(status=OrderStatus.NEW.value).set(len(new))
        await self._reconcile_batch(new, report)

        return report

    async def _reconcile_batch(
        self, numbers: list[str], report: ReconciliationReport
    ) -> None:
        for number in numbers:
            try:
                outcome = await self.accrual_client.query(number)
            except AccrualServiceError as e:
                logger.warning(
                    f"Accrual query failed for order {number}: {e.message}",
                    extra={"order_number": number},
                )
                metrics.reconciliation_errors_total.labels(
                    error_type="accrual"
                ).inc()
                report.failed += 1
                report.failed_orders.append(number)
                continue

            if not outcome.is_terminal:
                report.pending += 1
                continue

            try:
                async with self.ledger_scope() as repos:
                    applied = await ApplyAccrualOutcome(
                        order_repository=repos.orders,
                        account_repository=repos.accounts,
                    ).execute(number, outcome)
            except Exception:
                logger.exception(f"Failed to apply accrual outcome to order {number}")
                metrics.reconciliation_errors_total.labels(error_type="storage").inc()
                report.failed += 1
                report.failed_orders.append(number)
                continue

            if applied:
                logger.info(
                    f"Order {number} finalized as {outcome.verdict.value}",
                    extra={"order_number": number, "accrual": outcome.accrual},
                )
                report.finalized += 1
