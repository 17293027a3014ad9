"""
Withdrawal repository interface.
"""

from abc import ABC, abstractmethod

from comptable.domain.entities.withdrawal import Withdrawal


class IWithdrawalRepository(ABC):
    """Abstract repository interface for withdrawal history."""

    @abstractmethod
    async def create(self, withdrawal: Withdrawal) -> Withdrawal:
        """
        Persist a withdrawal record.

        Args:
            withdrawal: Withdrawal entity to persist

        Returns:
            Created withdrawal
        """

    @abstractmethod
    async def list_by_owner(self, owner: str) -> list[Withdrawal]:
        """
        List withdrawals of a user, oldest first.

        Args:
            owner: Owner login

        Returns:
            List of withdrawal entities (possibly empty)
        """
