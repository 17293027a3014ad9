"""API routes."""
from comptable.presentation.api.routes import balance, health, orders, users

__all__ = [
    "balance",
    "health",
    "orders",
    "users",
]
