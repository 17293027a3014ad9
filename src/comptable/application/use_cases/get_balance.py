"""
Get Balance use case.
"""

from comptable.domain.entities.account import Balance
from comptable.domain.repositories.i_account_repository import IAccountRepository


class GetBalance:
    """Read a user's current and withdrawn totals."""

    def __init__(self, account_repository: IAccountRepository):
        self.account_repository = account_repository

    async def execute(self, login: str) -> Balance:
        """
        Execute balance lookup.

        Raises:
            EntityNotFoundError: If account does not exist
        """
        return await self.account_repository.get_balance(login)
