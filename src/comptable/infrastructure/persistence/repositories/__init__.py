"""SQLAlchemy repository implementations."""

from comptable.infrastructure.persistence.repositories.account_repository import (
    AccountRepository,
)
from comptable.infrastructure.persistence.repositories.order_repository import (
    OrderRepository,
)
from comptable.infrastructure.persistence.repositories.withdrawal_repository import (  # noqa: E501
    WithdrawalRepository,
)

__all__ = [
    "AccountRepository",
    "OrderRepository",
    "WithdrawalRepository",
]
