"""
Balance-related domain exceptions.
"""

from decimal import Decimal

from comptable.domain.exceptions.base import ComptableException


class InsufficientFundsError(ComptableException):
    """Raised when balance cannot cover a withdrawal."""

    def __init__(self, login: str, requested: Decimal):
        self.login = login
        self.requested = requested
        super().__init__(
            f"Insufficient points to withdraw {requested}",
            code="INSUFFICIENT_FUNDS",
        )
