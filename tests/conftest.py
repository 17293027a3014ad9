"""
Test fixtures and configuration.

Integration and e2e tests run against a throwaway SQLite file per test,
so no database server is needed.
"""

from typing import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from comptable.config.settings import Settings, override_settings, reset_settings
from comptable.di.container import DIContainer, override_container
from comptable.infrastructure.accrual.accrual_client import AccrualClient
from comptable.infrastructure.persistence.database import Database

ACCRUAL_BASE_URL = "http://accrual.test"


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Test settings pointing at a per-test SQLite file."""
    test_settings = Settings(
        ENV="test",
        DATABASE_URI=f"sqlite+aiosqlite:///{tmp_path / 'comptable.db'}",
        ACCRUAL_SYSTEM_ADDRESS="",
        POLL_INTERVAL=0.05,
        LOG_LEVEL="WARNING",
    )
    override_settings(test_settings)
    yield test_settings
    reset_settings()


@pytest_asyncio.fixture
async def database(settings: Settings) -> AsyncGenerator[Database, None]:
    """
    Connected database with schema created.

    Each test gets a clean database.
    """
    db = Database(database_url=settings.DATABASE_URI)
    await db.connect()
    await db.create_schema()

    yield db

    await db.disconnect()


@pytest_asyncio.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Provide database session for tests (commits on exit)."""
    async with database.session() as session:
        yield session


@pytest_asyncio.fixture
async def container(settings: Settings) -> AsyncGenerator[DIContainer, None]:
    """Initialized DI container installed as the global one."""
    test_container = DIContainer()
    override_container(test_container)
    await test_container.initialize()

    yield test_container

    await test_container.shutdown()
    override_container(None)


@pytest.fixture
def install_accrual_transport(container: DIContainer) -> Callable:
    """
    Route the container's accrual client through an httpx MockTransport.

    Usage:
        install_accrual_transport(lambda request: httpx.Response(204))
    """

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> AccrualClient:
        client = AccrualClient(
            base_url=ACCRUAL_BASE_URL,
            transport=httpx.MockTransport(handler),
        )
        container._accrual_client = client
        return client

    return install


@pytest_asyncio.fixture
async def client(
    settings: Settings, container: DIContainer
) -> AsyncGenerator[AsyncClient, None]:
    """
    Provide HTTP client for API testing.

    The container is initialized by its fixture, so the app lifespan
    is not needed here.
    """
    from comptable.main import create_app

    app = create_app(settings)
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest_asyncio.fixture
async def make_user(settings: Settings, container: DIContainer) -> Callable:
    """
    Factory returning a logged-in HTTP client for a fresh user.

    Each client keeps its own session cookie.
    """
    from comptable.main import create_app

    app = create_app(settings)
    clients: list[AsyncClient] = []

    async def make(login: str, password: str = "secret") -> AsyncClient:
        ac = AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")
        clients.append(ac)
        response = await ac.post(
            "/api/user/register", json={"login": login, "password": password}
        )
        assert response.status_code == 200, response.text
        return ac

    yield make

    for ac in clients:
        await ac.aclose()
