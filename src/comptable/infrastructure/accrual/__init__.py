"""Accrual system integration."""

from comptable.infrastructure.accrual.accrual_client import AccrualClient
from comptable.infrastructure.accrual.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerError,
    CircuitState,
)

__all__ = [
    "AccrualClient",
    "CircuitBreaker",
    "CircuitBreakerError",
    "CircuitState",
]
