"""
FastAPI dependency injection.

Provides dependencies for FastAPI routes using the DI container.
"""

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from comptable.application.use_cases.authenticate_user import AuthenticateUser
from comptable.application.use_cases.get_balance import GetBalance
from comptable.application.use_cases.list_orders import ListOrders
from comptable.application.use_cases.list_withdrawals import ListWithdrawals
from comptable.application.use_cases.register_user import RegisterUser
from comptable.application.use_cases.submit_order import SubmitOrder
from comptable.application.use_cases.withdraw_points import WithdrawPoints
from comptable.di.container import get_container
from comptable.infrastructure.auth.session_store import SessionStore

# ================================================================
# Database Dependencies
# ================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get database session dependency.

    Yields async database session from container. FastAPI caches it per
    request, so use cases and the route share one transaction.

    Teardown runs after the response is sent. Routes that write commit
    explicitly before returning so a failed commit still becomes a 500.
    Teardown rolls back on error and commits whatever is left otherwise.
    """
    container = get_container()
    async with container.database.session() as session:
        yield session


# ================================================================
# Service Dependencies
# ================================================================


def get_session_store() -> SessionStore:
    """Get SessionStore dependency."""
    return get_container().session_store


# ================================================================
# Use Case Dependencies
# ================================================================


def get_register_user(
    session: AsyncSession = Depends(get_db_session),
) -> RegisterUser:
    """Get RegisterUser use case dependency."""
    return get_container().get_register_user(session)


def get_authenticate_user(
    session: AsyncSession = Depends(get_db_session),
) -> AuthenticateUser:
    """Get AuthenticateUser use case dependency."""
    return get_container().get_authenticate_user(session)


def get_submit_order(
    session: AsyncSession = Depends(get_db_session),
) -> SubmitOrder:
    """Get SubmitOrder use case dependency."""
    return get_container().get_submit_order(session)


def get_list_orders(
    session: AsyncSession = Depends(get_db_session),
) -> ListOrders:
    """Get ListOrders use case dependency."""
    return get_container().get_list_orders(session)


def get_get_balance(
    session: AsyncSession = Depends(get_db_session),
) -> GetBalance:
    """Get GetBalance use case dependency."""
    return get_container().get_get_balance(session)


def get_withdraw_points(
    session: AsyncSession = Depends(get_db_session),
) -> WithdrawPoints:
    """Get WithdrawPoints use case dependency."""
    return get_container().get_withdraw_points(session)


def get_list_withdrawals(
    session: AsyncSession = Depends(get_db_session),
) -> ListWithdrawals:
    """Get ListWithdrawals use case dependency."""
    return get_container().get_list_withdrawals(session)
