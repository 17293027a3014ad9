"""
Order repository implementation using SQLAlchemy.
"""

from typing import Iterable, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from comptable.domain.entities.order import PENDING_STATUSES, Order, OrderStatus
from comptable.domain.repositories.i_order_repository import IOrderRepository
from comptable.domain.value_objects.accrual_outcome import (
    AccrualOutcome,
    AccrualVerdict,
)
from comptable.infrastructure.persistence.models import OrderModel
from comptable.infrastructure.persistence.repositories._dialect import (
    as_utc,
    insert_ignoring_conflicts,
)


class OrderRepository(IOrderRepository):
    """
    SQLAlchemy implementation of the order ledger.

    Status transitions are conditional UPDATEs on the current status,
    so a final order is never overwritten even by a late, retried result.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def insert_if_absent(self, order: Order) -> bool:
        """
        Insert order unless its number is already taken.

        Args:
            order: New order in NEW status

        Returns:
            True if inserted, False if number already exists
        """
        stmt = insert_ignoring_conflicts(
            self.session, OrderModel, index_elements=["number"]
        ).values(
            number=order.number,
            owner=order.owner,
            status=order.status.value,
            accrual=order.accrual,
            uploaded_at=order.uploaded_at,
        )
        result = await self.session.execute(stmt)

        return result.rowcount == 1

    async def get_by_number(self, number: str) -> Optional[Order]:
        """
        Retrieve order by number.

        Args:
            number: Order number

        Returns:
            Order entity if found, None otherwise
        """
        stmt = select(OrderModel).where(OrderModel.number == number)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        return self._to_entity(model) if model else None

    async def list_by_owner(self, owner: str) -> list[Order]:
        """
        List orders of a user, oldest upload first.

        Args:
            owner: Owner login

        Returns:
            List of order entities
        """
        stmt = (
            select(OrderModel)
            .where(OrderModel.owner == owner)
            .order_by(OrderModel.uploaded_at.asc(), OrderModel.number.asc())
        )
        result = await self.session.execute(stmt)
        models = result.scalars().all()

        return [self._to_entity(model) for model in models]

    async def list_numbers_by_status(self, status: OrderStatus) -> list[str]:
        """
        List numbers of all orders in given status.

        Args:
            status: Status to select

        Returns:
            Order numbers, oldest upload first
        """
        stmt = (
            select(OrderModel.number)
            .where(OrderModel.status == status.value)
            .order_by(OrderModel.uploaded_at.asc())
        )
        result = await self.session.execute(stmt)

        return list(result.scalars().all())

    async def mark_processing(self, numbers: Iterable[str]) -> int:
        """
        Move NEW orders to PROCESSING.

        Args:
            numbers: Order numbers to move

        Returns:
            Number of orders moved
        """
        numbers = list(numbers)
        if not numbers:
            return 0

        stmt = (
            update(OrderModel)
            .where(
                OrderModel.number.in_(numbers),
                OrderModel.status == OrderStatus.NEW.value,
            )
            .values(status=OrderStatus.PROCESSING.value)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)

        return result.rowcount

    async def finalize(self, number: str, outcome: AccrualOutcome) -> bool:
        """
        Write a terminal outcome to a pending order.

        Args:
            number: Order number
            outcome: Terminal accrual outcome

        Returns:
            True if the order changed, False if already final or missing

        Raises:
            ValueError: If outcome is not terminal
        """
        if not outcome.is_terminal:
            raise ValueError("Only terminal outcomes can finalize an order")

        if outcome.verdict == AccrualVerdict.PROCESSED:
            values = {
                "status": OrderStatus.PROCESSED.value,
                "accrual": outcome.accrual,
            }
        else:
            values = {"status": OrderStatus.INVALID.value, "accrual": None}

        stmt = (
            update(OrderModel)
            .where(
                OrderModel.number == number,
                OrderModel.status.in_([s.value for s in PENDING_STATUSES]),
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)

        return result.rowcount == 1

    def _to_entity(self, model: OrderModel) -> Order:
        """Convert ORM model to domain entity."""
        return Order(
            number=model.number,
            owner=model.owner,
            status=OrderStatus(model.status),
            accrual=model.accrual,
            uploaded_at=as_utc(model.uploaded_at),
        )
