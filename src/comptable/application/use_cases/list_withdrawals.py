"""
List Withdrawals use case.
"""

from comptable.domain.entities.withdrawal import Withdrawal
from comptable.domain.repositories.i_withdrawal_repository import (
    IWithdrawalRepository,
)


class ListWithdrawals:
    """List a user's withdrawals, oldest first."""

    def __init__(self, withdrawal_repository: IWithdrawalRepository):
        self.withdrawal_repository = withdrawal_repository

    async def execute(self, login: str) -> list[Withdrawal]:
        return await self.withdrawal_repository.list_by_owner(login)
