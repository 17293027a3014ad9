"""
Domain exceptions package.
"""

# Accrual exceptions
from comptable.domain.exceptions.accrual import (
    AccrualRateLimitedError,
    AccrualServiceError,
)

# Auth exceptions
from comptable.domain.exceptions.auth import (
    AuthenticationError,
    InvalidCredentialsError,
    NotAuthenticatedError,
)

# Balance exceptions
from comptable.domain.exceptions.balance import InsufficientFundsError

# Base exceptions
from comptable.domain.exceptions.base import (
    ComptableException,
    DuplicateEntityError,
    EntityNotFoundError,
    ValidationError,
)

# Order exceptions
from comptable.domain.exceptions.orders import (
    InvalidOrderNumberError,
    OrderOwnedByOtherUserError,
)

__all__ = [
    # Base
    "ComptableException",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "ValidationError",
    # Auth
    "AuthenticationError",
    "InvalidCredentialsError",
    "NotAuthenticatedError",
    # Orders
    "InvalidOrderNumberError",
    "OrderOwnedByOtherUserError",
    # Balance
    "InsufficientFundsError",
    # Accrual
    "AccrualServiceError",
    "AccrualRateLimitedError",
]
