"""
Account repository implementation using SQLAlchemy.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from comptable.domain.entities.account import Account, Balance
from comptable.domain.exceptions import DuplicateEntityError, EntityNotFoundError
from comptable.domain.repositories.i_account_repository import IAccountRepository
from comptable.infrastructure.persistence.models import AccountModel
from comptable.infrastructure.persistence.repositories._dialect import (
    as_utc,
    insert_ignoring_conflicts,
)


class AccountRepository(IAccountRepository):
    """
    SQLAlchemy implementation of account repository.

    Balance changes are single UPDATE statements so the row lock taken
    by the database serializes concurrent debits and credits.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, account: Account) -> Account:
        """
        Create a new account in the database.

        Args:
            account: Account entity to persist

        Returns:
            Created account

        Raises:
            DuplicateEntityError: If login is already taken
        """
        stmt = insert_ignoring_conflicts(
            self.session, AccountModel, index_elements=["login"]
        ).values(
            login=account.login,
            password_hash=account.password_hash,
            current=account.current,
            withdrawn=account.withdrawn,
            created_at=account.created_at,
        )
        result = await self.session.execute(stmt)

        if result.rowcount != 1:
            raise DuplicateEntityError("Account", f"login '{account.login}'")

        return account

    async def get_by_login(self, login: str) -> Optional[Account]:
        """
        Retrieve account by login.

        Args:
            login: Account login

        Returns:
            Account entity if found, None otherwise
        """
        stmt = select(AccountModel).where(AccountModel.login == login)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        return self._to_entity(model) if model else None

    async def get_balance(self, login: str) -> Balance:
        """
        Get current and withdrawn totals.

        Args:
            login: Account login

        Returns:
            Balance snapshot

        Raises:
            EntityNotFoundError: If account not found
        """
        stmt = select(AccountModel.current, AccountModel.withdrawn).where(
            AccountModel.login == login
        )
        result = await self.session.execute(stmt)
        row = result.one_or_none()

        if row is None:
            raise EntityNotFoundError("Account", login)

        return Balance(current=row.current, withdrawn=row.withdrawn)

    async def credit(self, login: str, amount: Decimal) -> None:
        """
        Increase current balance unconditionally.

        Args:
            login: Account login
            amount: Non-negative amount to add

        Raises:
            ValueError: If amount is negative
            EntityNotFoundError: If account not found
        """
        if amount < 0:
            raise ValueError("Credit amount cannot be negative")

        stmt = (
            update(AccountModel)
            .where(AccountModel.login == login)
            .values(current=AccountModel.current + amount)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)

        if result.rowcount != 1:
            raise EntityNotFoundError("Account", login)

    async def debit(self, login: str, amount: Decimal) -> bool:
        """
        Move amount from current to withdrawn if funds allow.

        Args:
            login: Account login
            amount: Positive amount to withdraw

        Returns:
            True if debited, False if current balance is insufficient
        """
        if amount <= 0:
            raise ValueError("Debit amount must be positive")

        stmt = (
            update(AccountModel)
            .where(AccountModel.login == login, AccountModel.current >= amount)
            .values(
                current=AccountModel.current - amount,
                withdrawn=AccountModel.withdrawn + amount,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)

        return result.rowcount == 1

    def _to_entity(self, model: AccountModel) -> Account:
        """Convert ORM model to domain entity."""
        return Account(
            login=model.login,
            password_hash=model.password_hash,
            current=model.current,
            withdrawn=model.withdrawn,
            created_at=as_utc(model.created_at),
        )
