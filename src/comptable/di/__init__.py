"""
Dependency Injection module for Comptable.

Provides container and dependency functions for FastAPI routes.
"""

from comptable.di.container import (
    DIContainer,
    get_container,
    initialize_container,
    override_container,
    shutdown_container,
)
from comptable.di.dependencies import (
    get_authenticate_user,
    get_db_session,
    get_get_balance,
    get_list_orders,
    get_list_withdrawals,
    get_register_user,
    get_session_store,
    get_submit_order,
    get_withdraw_points,
)

__all__ = [
    # Container
    "DIContainer",
    "get_container",
    "initialize_container",
    "override_container",
    "shutdown_container",
    # Dependencies
    "get_db_session",
    "get_session_store",
    "get_register_user",
    "get_authenticate_user",
    "get_submit_order",
    "get_list_orders",
    "get_get_balance",
    "get_withdraw_points",
    "get_list_withdrawals",
]
