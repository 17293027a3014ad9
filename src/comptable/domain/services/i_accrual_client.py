"""
Accrual client interface.

Defines contract for querying the external accrual system.
"""

from abc import ABC, abstractmethod

from comptable.domain.value_objects.accrual_outcome import AccrualOutcome


class IAccrualClient(ABC):
    """
    Interface for asking the accrual system about one order.

    Clean Architecture: Domain layer defines interface,
    Infrastructure layer implements the HTTP calls.
    """

    @abstractmethod
    async def query(self, order_number: str) -> AccrualOutcome:
        """
        Fetch accrual verdict for an order.

        Args:
            order_number: Order number to look up

        Returns:
            AccrualOutcome (pending, invalid or processed)

        Raises:
            AccrualRateLimitedError: If accrual system throttles us
            AccrualServiceError: On transport errors, 5xx or bad payload
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
