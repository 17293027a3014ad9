"""
Integration tests for AccountRepository.

Runs against a SQLite file database.

Usage:
    pytest tests/integration/database/test_account_repository.py
"""

import asyncio
from decimal import Decimal

import pytest
from sqlalchemy import delete, func, select

from comptable.domain.entities.account import Account
from comptable.domain.entities.order import Order
from comptable.domain.entities.withdrawal import Withdrawal
from comptable.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from comptable.infrastructure.persistence.database import Database
from comptable.infrastructure.persistence.models import (
    AccountModel,
    OrderModel,
    WithdrawalModel,
)
from comptable.infrastructure.persistence.repositories import (
    AccountRepository,
    OrderRepository,
    WithdrawalRepository,
)


class TestAccountRepository:
    """Integration tests for account persistence and balance updates."""

    # ================================================================
    # Helper Methods
    # ================================================================

    async def _create_account(
        self, database: Database, login: str, current: str = "0"
    ) -> None:
        async with database.session() as session:
            await AccountRepository(session).create(
                Account(login=login, password_hash="hash", current=Decimal(current))
            )

    async def _balance(self, database: Database, login: str):
        async with database.session() as session:
            return await AccountRepository(session).get_balance(login)

    # ================================================================
    # Create and Read
    # ================================================================

    async def test_create_and_get(self, database):
        await self._create_account(database, "alice")

        async with database.session() as session:
            account = await AccountRepository(session).get_by_login("alice")

        assert account.login == "alice"
        assert account.password_hash == "hash"
        assert account.current == Decimal("0")
        assert account.created_at.tzinfo is not None

    async def test_duplicate_login(self, database):
        await self._create_account(database, "alice")

        with pytest.raises(DuplicateEntityError):
            await self._create_account(database, "alice")

    async def test_get_missing(self, db_session):
        assert await AccountRepository(db_session).get_by_login("ghost") is None

    async def test_balance_of_missing_account(self, db_session):
        with pytest.raises(EntityNotFoundError):
            await AccountRepository(db_session).get_balance("ghost")

    # ================================================================
    # Credit and Debit
    # ================================================================

    async def test_credit(self, database):
        await self._create_account(database, "alice")

        async with database.session() as session:
            await AccountRepository(session).credit("alice", Decimal("729.98"))

        balance = await self._balance(database, "alice")
        assert balance.current == Decimal("729.98")
        assert balance.withdrawn == Decimal("0")

    async def test_credit_missing_account(self, db_session):
        with pytest.raises(EntityNotFoundError):
            await AccountRepository(db_session).credit("ghost", Decimal("1"))

    async def test_debit_moves_points_to_withdrawn(self, database):
        await self._create_account(database, "alice", current="100")

        async with database.session() as session:
            assert await AccountRepository(session).debit("alice", Decimal("40.5"))

        balance = await self._balance(database, "alice")
        assert balance.current == Decimal("59.5")
        assert balance.withdrawn == Decimal("40.5")

    async def test_debit_whole_balance(self, database):
        await self._create_account(database, "alice", current="100")

        async with database.session() as session:
            assert await AccountRepository(session).debit("alice", Decimal("100"))

        assert (await self._balance(database, "alice")).current == Decimal("0")

    async def test_debit_insufficient_changes_nothing(self, database):
        await self._create_account(database, "alice", current="100")

        async with database.session() as session:
            assert not await AccountRepository(session).debit("alice", Decimal("150"))

        balance = await self._balance(database, "alice")
        assert balance.current == Decimal("100")
        assert balance.withdrawn == Decimal("0")

    async def test_concurrent_debits_never_overdraw(self, database):
        """
        Test that N racing withdrawals of X against a balance of k*X
        leave exactly k successes and a zero balance.
        """
        await self._create_account(database, "alice", current="300")

        async def withdraw() -> bool:
            async with database.session() as session:
                return await AccountRepository(session).debit("alice", Decimal("100"))

        results = await asyncio.gather(*(withdraw() for _ in range(8)))

        assert results.count(True) == 3
        balance = await self._balance(database, "alice")
        assert balance.current == Decimal("0")
        assert balance.withdrawn == Decimal("300")

    # ================================================================
    # Cascade
    # ================================================================

    async def test_deleting_account_removes_its_orders_and_withdrawals(self, database):
        await self._create_account(database, "alice", current="10")

        async with database.session() as session:
            await OrderRepository(session).insert_if_absent(
                Order(number="79927398713", owner="alice")
            )
            await WithdrawalRepository(session).create(
                Withdrawal(order_number="18", owner="alice", amount=Decimal("1"))
            )

        async with database.session() as session:
            await session.execute(
                delete(AccountModel).where(AccountModel.login == "alice")
            )

        async with database.session() as session:
            orders = await session.scalar(select(func.count()).select_from(OrderModel))
            withdrawals = await session.scalar(
                select(func.count()).select_from(WithdrawalModel)
            )

        assert orders == 0
        assert withdrawals == 0
