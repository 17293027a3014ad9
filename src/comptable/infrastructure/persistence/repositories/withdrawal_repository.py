"""
Withdrawal repository implementation using SQLAlchemy.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from comptable.domain.entities.withdrawal import Withdrawal
from comptable.domain.repositories.i_withdrawal_repository import (
    IWithdrawalRepository,
)
from comptable.infrastructure.persistence.models import WithdrawalModel
from comptable.infrastructure.persistence.repositories._dialect import as_utc


class WithdrawalRepository(IWithdrawalRepository):
    """SQLAlchemy implementation of withdrawal history."""

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, withdrawal: Withdrawal) -> Withdrawal:
        """
        Persist a withdrawal record.

        Args:
            withdrawal: Withdrawal entity to persist

        Returns:
            Created withdrawal
        """
        model = WithdrawalModel(
            id=withdrawal.id,
            owner=withdrawal.owner,
            order_number=withdrawal.order_number,
            amount=withdrawal.amount,
            processed_at=withdrawal.processed_at,
        )

        self.session.add(model)
        await self.session.flush()

        return withdrawal

    async def list_by_owner(self, owner: str) -> list[Withdrawal]:
        """
        List withdrawals of a user, oldest first.

        Args:
            owner: Owner login

        Returns:
            List of withdrawal entities
        """
        stmt = (
            select(WithdrawalModel)
            .where(WithdrawalModel.owner == owner)
            .order_by(WithdrawalModel.processed_at.asc())
        )
        result = await self.session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    def _to_entity(self, model: WithdrawalModel) -> Withdrawal:
        """Convert ORM model to domain entity."""
        return Withdrawal(
            id=model.id,
            owner=model.owner,
            order_number=model.order_number,
            amount=model.amount,
            processed_at=as_utc(model.processed_at),
        )
