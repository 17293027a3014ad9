"""API request/response schemas."""

from comptable.presentation.schemas.balance_schemas import (
    BalanceResponse,
    WithdrawalResponse,
    WithdrawRequest,
)
from comptable.presentation.schemas.order_schemas import OrderResponse
from comptable.presentation.schemas.user_schemas import (
    CredentialsRequest,
    UserResponse,
)

__all__ = [
    "BalanceResponse",
    "CredentialsRequest",
    "OrderResponse",
    "UserResponse",
    "WithdrawalResponse",
    "WithdrawRequest",
]
