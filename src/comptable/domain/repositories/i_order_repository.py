"""
Order repository interface.

Defines contract for the order ledger.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from comptable.domain.entities.order import Order, OrderStatus
from comptable.domain.value_objects.accrual_outcome import AccrualOutcome


class IOrderRepository(ABC):
    """
    Abstract repository interface for order persistence.

    Order numbers are globally unique; uniqueness is enforced by storage.
    """

    @abstractmethod
    async def insert_if_absent(self, order: Order) -> bool:
        """
        Insert order unless its number is already taken.

        Args:
            order: New order in NEW status

        Returns:
            True if inserted, False if number already exists
        """

    @abstractmethod
    async def get_by_number(self, number: str) -> Optional[Order]:
        """
        Retrieve order by number.

        Args:
            number: Order number

        Returns:
            Order entity if found, None otherwise
        """

    @abstractmethod
    async def list_by_owner(self, owner: str) -> list[Order]:
        """
        List orders of a user, oldest upload first.

        Args:
            owner: Owner login

        Returns:
            List of order entities (possibly empty)
        """

    @abstractmethod
    async def list_numbers_by_status(self, status: OrderStatus) -> list[str]:
        """
        List numbers of all orders in given status.

        Args:
            status: Status to select

        Returns:
            Order numbers, oldest upload first
        """

    @abstractmethod
    async def mark_processing(self, numbers: Iterable[str]) -> int:
        """
        Move NEW orders to PROCESSING.

        Orders no longer in NEW status are left untouched.

        Args:
            numbers: Order numbers to move

        Returns:
            Number of orders moved
        """

    @abstractmethod
    async def finalize(self, number: str, outcome: AccrualOutcome) -> bool:
        """
        Write a terminal outcome to a pending order.

        Args:
            number: Order number
            outcome: Terminal accrual outcome

        Returns:
            True if the order was pending and is now final,
            False if it was already final or does not exist
        """
