"""
Order-related domain exceptions.
"""

from comptable.domain.exceptions.base import ComptableException


class InvalidOrderNumberError(ComptableException):
    """Raised when order number is malformed or fails the Luhn check."""

    def __init__(self, order_number: str, reason: str = "fails Luhn checksum"):
        self.order_number = order_number
        super().__init__(
            f"Invalid order number '{order_number}': {reason}",
            code="INVALID_ORDER_NUMBER",
        )


class OrderOwnedByOtherUserError(ComptableException):
    """Raised when order number was already uploaded by another user."""

    def __init__(self, order_number: str):
        self.order_number = order_number
        super().__init__(
            f"Order {order_number} was already uploaded by another user",
            code="ORDER_OWNED_BY_OTHER_USER",
        )
