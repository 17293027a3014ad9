"""Domain service interfaces."""

from comptable.domain.services.i_accrual_client import IAccrualClient
from comptable.domain.services.i_password_hasher import IPasswordHasher

__all__ = [
    "IAccrualClient",
    "IPasswordHasher",
]
