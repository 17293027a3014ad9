"""
Account repository interface.

Defines contract for account persistence and balance bookkeeping.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from comptable.domain.entities.account import Account, Balance


class IAccountRepository(ABC):
    """
    Abstract repository interface for accounts and their balances.

    Balance mutations must be atomic per account row.
    """

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """
        Create a new account.

        Args:
            account: Account entity to persist

        Returns:
            Created account

        Raises:
            DuplicateEntityError: If login is already taken
        """

    @abstractmethod
    async def get_by_login(self, login: str) -> Optional[Account]:
        """
        Retrieve account by login.

        Args:
            login: Account login

        Returns:
            Account entity if found, None otherwise
        """

    @abstractmethod
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

    @abstractmethod
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

    @abstractmethod
    async def debit(self, login: str, amount: Decimal) -> bool:
        """
        Move amount from current to withdrawn if funds allow.

        Check and update happen in one indivisible step.

        Args:
            login: Account login
            amount: Positive amount to withdraw

        Returns:
            True if debited, False if current balance is insufficient
        """
