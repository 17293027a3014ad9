"""
OrderNumber value object - Luhn-checked purchase order number.
"""

from dataclasses import dataclass

MIN_ORDER_NUMBER_LENGTH = 2
# Matches the width of the order number columns
MAX_ORDER_NUMBER_LENGTH = 64


def luhn_valid(digits: str) -> bool:
    """
    Check a digit string against the Luhn checksum.

    Walks the digits right-to-left, doubling every second one starting
    from the second-rightmost and subtracting 9 from doubled values
    above 9. Valid iff the total is divisible by 10.

    Args:
        digits: String of ASCII digits

    Returns:
        True if checksum passes, False for non-digit or empty input
    """
    if not digits or not digits.isascii() or not digits.isdigit():
        return False

    total = 0
    for position, char in enumerate(reversed(digits)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit

    return total % 10 == 0


@dataclass(frozen=True)
class OrderNumber:
    """
    Value object representing a validated order number.

    Business rules:
    - Digits only, no whitespace or sign
    - Between MIN_ORDER_NUMBER_LENGTH and MAX_ORDER_NUMBER_LENGTH digits
    - Must pass the Luhn checksum
    - Immutable once created
    """

    value: str

    def __post_init__(self):
        """Validate order number on creation."""
        if not self.value:
            raise ValueError("Order number cannot be empty")

        if not self.value.isascii() or not self.value.isdigit():
            raise ValueError("Order number must contain digits only")

        if len(self.value) < MIN_ORDER_NUMBER_LENGTH:
            raise ValueError(
                f"Order number must have at least {MIN_ORDER_NUMBER_LENGTH} digits"
            )

        if len(self.value) > MAX_ORDER_NUMBER_LENGTH:
            raise ValueError(
                f"Order number must have at most {MAX_ORDER_NUMBER_LENGTH} digits"
            )

        if not luhn_valid(self.value):
            raise ValueError("Order number fails Luhn checksum")

    def __str__(self) -> str:
        return self.value
