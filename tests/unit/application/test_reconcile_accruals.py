"""
Unit tests for ReconcileAccruals use case.

Uses in-memory repositories and a scripted accrual client.

Usage:
    pytest tests/unit/application/test_reconcile_accruals.py
"""

from contextlib import asynccontextmanager
from decimal import Decimal
from typing import Optional, Union
from unittest.mock import AsyncMock

import pytest

from comptable.application.use_cases.reconcile_accruals import (
    LedgerRepositories,
    ReconcileAccruals,
)
from comptable.domain.entities.order import Order, OrderStatus
from comptable.domain.exceptions import AccrualRateLimitedError, AccrualServiceError
from comptable.domain.value_objects.accrual_outcome import (
    AccrualOutcome,
    AccrualVerdict,
)


class FakeOrderRepository:
    """Dict-backed order ledger with the same conditional semantics."""

    def __init__(self, orders: list[Order]):
        self.orders = {order.number: order for order in orders}

    async def list_numbers_by_status(self, status: OrderStatus) -> list[str]:
        return [n for n, o in self.orders.items() if o.status == status]

    async def mark_processing(self, numbers) -> int:
        moved = 0
        for number in numbers:
            if self.orders[number].status == OrderStatus.NEW:
                self.orders[number].status = OrderStatus.PROCESSING
                moved += 1
        return moved

    async def finalize(self, number: str, outcome: AccrualOutcome) -> bool:
        order = self.orders.get(number)
        if order is None or order.status.is_terminal:
            return False
        if outcome.verdict == AccrualVerdict.PROCESSED:
            order.status, order.accrual = OrderStatus.PROCESSED, outcome.accrual
        else:
            order.status, order.accrual = OrderStatus.INVALID, None
        return True

    async def get_by_number(self, number: str) -> Optional[Order]:
        return self.orders.get(number)


class FakeAccountRepository:
    def __init__(self):
        self.balances: dict[str, Decimal] = {}

    async def credit(self, login: str, amount: Decimal) -> None:
        self.balances[login] = self.balances.get(login, Decimal("0")) + amount


class ScriptedAccrualClient:
    """Answers from a number -> outcome (or exception) map."""

    def __init__(self, answers: dict[str, Union[AccrualOutcome, Exception]]):
        self.answers = answers
        self.queried: list[str] = []

    async def query(self, order_number: str) -> AccrualOutcome:
        self.queried.append(order_number)
        answer = self.answers.get(order_number, AccrualOutcome.pending())
        if isinstance(answer, Exception):
            raise answer
        return answer

    async def close(self) -> None:
        pass


class TestReconcileAccruals:
    """Unit tests for one reconciliation pass."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def _setup(self, orders: list[Order], answers: dict):
        order_repo = FakeOrderRepository(orders)
        account_repo = FakeAccountRepository()
        client = ScriptedAccrualClient(answers)

        @asynccontextmanager
        async def ledger_scope():
            yield LedgerRepositories(orders=order_repo, accounts=account_repo)

        use_case = ReconcileAccruals(ledger_scope=ledger_scope, accrual_client=client)
        return use_case, order_repo, account_repo, client

    # ================================================================
    # Test Methods
    # ================================================================

    async def test_new_order_processed_and_credited(self):
        use_case, orders, accounts, _ = self._setup(
            [Order(number="79927398713", owner="alice")],
            {"79927398713": AccrualOutcome.processed(Decimal("500"))},
        )

        report = await use_case.execute()

        assert report.started == 1
        assert report.finalized == 1
        assert orders.orders["79927398713"].status == OrderStatus.PROCESSED
        assert accounts.balances["alice"] == Decimal("500")

    async def test_pending_order_moves_to_processing(self):
        use_case, orders, accounts, _ = self._setup(
            [Order(number="79927398713", owner="alice")],
            {},
        )

        report = await use_case.execute()

        assert report.pending == 1
        assert orders.orders["79927398713"].status == OrderStatus.PROCESSING
        assert accounts.balances == {}

    async def test_processing_orders_queried_before_new(self):
        use_case, _, _, client = self._setup(
            [
                Order(number="18", owner="alice"),
                Order(number="79927398713", owner="bob", status=OrderStatus.PROCESSING),
            ],
            {},
        )

        await use_case.execute()

        assert client.queried == ["79927398713", "18"]

    async def test_invalid_outcome_finalizes_without_credit(self):
        use_case, orders, accounts, _ = self._setup(
            [Order(number="18", owner="alice", status=OrderStatus.PROCESSING)],
            {"18": AccrualOutcome.invalid()},
        )

        report = await use_case.execute()

        assert report.finalized == 1
        assert orders.orders["18"].status == OrderStatus.INVALID
        assert accounts.balances == {}

    async def test_service_error_skips_order_only(self):
        """Test that one failing order does not stop the batch."""
        use_case, orders, accounts, _ = self._setup(
            [
                Order(number="18", owner="alice", status=OrderStatus.PROCESSING),
                Order(number="26", owner="bob", status=OrderStatus.PROCESSING),
            ],
            {
                "18": AccrualServiceError("boom", status_code=500),
                "26": AccrualOutcome.processed(Decimal("7.5")),
            },
        )

        report = await use_case.execute()

        assert report.failed == 1
        assert report.failed_orders == ["18"]
        assert report.finalized == 1
        assert orders.orders["18"].status == OrderStatus.PROCESSING
        assert accounts.balances == {"bob": Decimal("7.5")}

    async def test_storage_error_skips_order_only(self):
        use_case, orders, accounts, _ = self._setup(
            [
                Order(number="18", owner="alice", status=OrderStatus.PROCESSING),
                Order(number="26", owner="bob", status=OrderStatus.PROCESSING),
            ],
            {
                "18": AccrualOutcome.processed(Decimal("1")),
                "26": AccrualOutcome.processed(Decimal("2")),
            },
        )
        accounts.credit = AsyncMock(side_effect=[RuntimeError("disk full"), None])

        report = await use_case.execute()

        assert report.failed == 1
        assert report.finalized == 1

    async def test_rate_limit_aborts_pass(self):
        use_case, orders, _, client = self._setup(
            [
                Order(number="18", owner="alice", status=OrderStatus.PROCESSING),
                Order(number="26", owner="bob", status=OrderStatus.PROCESSING),
            ],
            {"18": AccrualRateLimitedError(retry_after=30)},
        )

        with pytest.raises(AccrualRateLimitedError) as exc_info:
            await use_case.execute()

        assert exc_info.value.retry_after == 30
        assert client.queried == ["18"]
        assert orders.orders["26"].status == OrderStatus.PROCESSING

    async def test_empty_ledger(self):
        use_case, _, _, client = self._setup([], {})

        report = await use_case.execute()

        assert report.total == 0
        assert client.queried == []
