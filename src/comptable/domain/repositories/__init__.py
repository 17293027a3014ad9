"""Repository interfaces."""

from comptable.domain.repositories.i_account_repository import IAccountRepository
from comptable.domain.repositories.i_order_repository import IOrderRepository
from comptable.domain.repositories.i_withdrawal_repository import (
    IWithdrawalRepository,
)

__all__ = [
    "IAccountRepository",
    "IOrderRepository",
    "IWithdrawalRepository",
]
