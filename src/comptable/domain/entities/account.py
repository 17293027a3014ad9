"""
Account entity - user identity plus points balance.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal


@dataclass
class Account:
    """
    Account entity keyed by login.

    Business rules:
    - Login is unique and immutable
    - Current balance never drops below zero
    - Withdrawn only grows
    """

    login: str
    password_hash: str = field(default="", repr=False)
    current: Decimal = field(default=Decimal("0"))
    withdrawn: Decimal = field(default=Decimal("0"))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Validate account data after initialization."""
        if not self.login:
            raise ValueError("Login is required")

        if self.current < 0:
            raise ValueError("Current balance cannot be negative")

        if self.withdrawn < 0:
            raise ValueError("Withdrawn total cannot be negative")


@dataclass(frozen=True)
class Balance:
    """Point-in-time snapshot of an account's totals."""

    current: Decimal
    withdrawn: Decimal
