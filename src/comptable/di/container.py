"""
Dependency Injection Container for Comptable.

Manages all service instances and their dependencies.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from comptable.application.use_cases.authenticate_user import AuthenticateUser
from comptable.application.use_cases.get_balance import GetBalance
from comptable.application.use_cases.list_orders import ListOrders
from comptable.application.use_cases.list_withdrawals import ListWithdrawals
from comptable.application.use_cases.reconcile_accruals import (
    LedgerRepositories,
    ReconcileAccruals,
)
from comptable.application.use_cases.register_user import RegisterUser
from comptable.application.use_cases.submit_order import SubmitOrder
from comptable.application.use_cases.withdraw_points import WithdrawPoints
from comptable.config.settings import get_settings
from comptable.domain.exceptions import AccrualServiceError
from comptable.domain.repositories.i_account_repository import IAccountRepository
from comptable.domain.repositories.i_order_repository import IOrderRepository
from comptable.domain.repositories.i_withdrawal_repository import (
    IWithdrawalRepository,
)
from comptable.domain.services.i_accrual_client import IAccrualClient
from comptable.domain.services.i_password_hasher import IPasswordHasher
from comptable.infrastructure.accrual.accrual_client import AccrualClient
from comptable.infrastructure.accrual.circuit_breaker import CircuitBreaker
from comptable.infrastructure.auth.password_hasher import Pbkdf2PasswordHasher
from comptable.infrastructure.auth.session_store import SessionStore
from comptable.infrastructure.monitoring import get_logger
from comptable.infrastructure.persistence.database import Database
from comptable.infrastructure.persistence.repositories.account_repository import (
    AccountRepository,
)
from comptable.infrastructure.persistence.repositories.order_repository import (
    OrderRepository,
)
from comptable.infrastructure.persistence.repositories.withdrawal_repository import (  # noqa: E501
    WithdrawalRepository,
)
from comptable.infrastructure.workers.accrual_poller import AccrualPoller

logger = get_logger(__name__)


class DIContainer:
    """
    Dependency Injection Container.

    Manages singleton instances of all services and repositories.
    Uses factory pattern for session-scoped dependencies.
    """

    def __init__(self):
        """Initialize container with None instances."""
        # Infrastructure
        self._database: Optional[Database] = None
        self._session_store: Optional[SessionStore] = None
        self._accrual_poller: Optional[AccrualPoller] = None

        # Domain Services
        self._accrual_client: Optional[IAccrualClient] = None
        self._circuit_breaker: Optional[CircuitBreaker] = None
        self._password_hasher: Optional[IPasswordHasher] = None

    async def initialize(self) -> None:
        """
        Initialize all services and establish connections.

        Raises:
            RuntimeError: If the database cannot be reached
        """
        await self.database.connect()

        if not await self.database.health_check():
            raise RuntimeError("Database is unreachable")

        await self.database.create_schema()

        if get_settings().ACCRUAL_SYSTEM_ADDRESS:
            self.accrual_poller.start()
        else:
            logger.warning(
                "ACCRUAL_SYSTEM_ADDRESS is not set, accrual reconciliation disabled"
            )

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._accrual_poller:
            await self._accrual_poller.stop()

        if self._accrual_client:
            await self._accrual_client.close()

        if self._database:
            await self._database.disconnect()

    # Infrastructure Getters

    @property
    def database(self) -> Database:
        """Get database instance."""
        if self._database is None:
            self._database = Database(
                database_url=get_settings().DATABASE_URI,
                echo=get_settings().DATABASE_ECHO,
            )
        return self._database

    @property
    def session_store(self) -> SessionStore:
        """Get session store instance."""
        if self._session_store is None:
            self._session_store = SessionStore(
                ttl_seconds=get_settings().SESSION_TTL_SECONDS
            )
        return self._session_store

    @property
    def accrual_poller(self) -> AccrualPoller:
        """Get reconciliation poller instance."""
        if self._accrual_poller is None:
            self._accrual_poller = AccrualPoller(
                reconcile=self.get_reconcile_accruals(),
                interval=get_settings().POLL_INTERVAL,
                rate_limit_pause=get_settings().RATE_LIMIT_DEFAULT_PAUSE,
            )
        return self._accrual_poller

    @asynccontextmanager
    async def ledger_scope(self) -> AsyncGenerator[LedgerRepositories, None]:
        """
        Provide order and account repositories sharing one transaction.

        Yields:
            LedgerRepositories bound to a fresh session
        """
        async with self.database.session() as session:
            yield LedgerRepositories(
                orders=self.get_order_repository(session),
                accounts=self.get_account_repository(session),
            )

    # Domain Service Getters

    @property
    def circuit_breaker(self) -> CircuitBreaker:
        """Get accrual circuit breaker instance."""
        if self._circuit_breaker is None:
            self._circuit_breaker = CircuitBreaker(
                failure_threshold=get_settings().CB_FAILURE_THRESHOLD,
                recovery_timeout=get_settings().CB_TIMEOUT_SECONDS,
                expected_exception=AccrualServiceError,
            )
        return self._circuit_breaker

    @property
    def accrual_client(self) -> IAccrualClient:
        """Get accrual system client instance."""
        if self._accrual_client is None:
            self._accrual_client = AccrualClient(
                base_url=get_settings().ACCRUAL_SYSTEM_ADDRESS,
                timeout=get_settings().ACCRUAL_TIMEOUT,
                circuit_breaker=self.circuit_breaker,
            )
        return self._accrual_client

    @property
    def password_hasher(self) -> IPasswordHasher:
        """Get password hasher instance."""
        if self._password_hasher is None:
            self._password_hasher = Pbkdf2PasswordHasher()
        return self._password_hasher

    # Repository Getters (Session-scoped)

    def get_account_repository(self, session: AsyncSession) -> IAccountRepository:
        return AccountRepository(session)

    def get_order_repository(self, session: AsyncSession) -> IOrderRepository:
        return OrderRepository(session)

    def get_withdrawal_repository(
        self, session: AsyncSession
    ) -> IWithdrawalRepository:
        return WithdrawalRepository(session)

    # Use Case Getters

    def get_register_user(self, session: AsyncSession) -> RegisterUser:
        """Get register user use case."""
        return RegisterUser(
            account_repository=self.get_account_repository(session),
            password_hasher=self.password_hasher,
        )

    def get_authenticate_user(self, session: AsyncSession) -> AuthenticateUser:
        """Get authenticate user use case."""
        return AuthenticateUser(
            account_repository=self.get_account_repository(session),
            password_hasher=self.password_hasher,
        )

    def get_submit_order(self, session: AsyncSession) -> SubmitOrder:
        """Get submit order use case."""
        return SubmitOrder(order_repository=self.get_order_repository(session))

    def get_list_orders(self, session: AsyncSession) -> ListOrders:
        """Get list orders use case."""
        return ListOrders(order_repository=self.get_order_repository(session))

    def get_get_balance(self, session: AsyncSession) -> GetBalance:
        """Get balance use case."""
        return GetBalance(account_repository=self.get_account_repository(session))

    def get_withdraw_points(self, session: AsyncSession) -> WithdrawPoints:
        """
        Get withdraw points use case.

        Both repositories share the session so debit and record commit together.
        """
        return WithdrawPoints(
            account_repository=self.get_account_repository(session),
            withdrawal_repository=self.get_withdrawal_repository(session),
        )

    def get_list_withdrawals(self, session: AsyncSession) -> ListWithdrawals:
        """Get list withdrawals use case."""
        return ListWithdrawals(
            withdrawal_repository=self.get_withdrawal_repository(session)
        )

    def get_reconcile_accruals(self) -> ReconcileAccruals:
        """Get reconciliation pass use case (opens its own sessions)."""
        return ReconcileAccruals(
            ledger_scope=self.ledger_scope,
            accrual_client=self.accrual_client,
        )


_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get or create global DI container."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def override_container(container: Optional[DIContainer]) -> None:
    """Replace global container (for testing)."""
    global _container
    _container = container


async def initialize_container() -> DIContainer:
    """Initialize and return DI container."""
    container = get_container()
    await container.initialize()
    return container


async def shutdown_container() -> None:
    """Shutdown DI container."""
    container = get_container()
    await container.shutdown()
