"""
Shared pytest fixtures for all tests.

Provides an in-memory SQLite database for repository tests, a mocked
customer repository for service tests and a few domain objects.
"""

import os
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from app.core.domain import DomainEventPublisher  # noqa: E402
from app.domains.customers.application.ports import ICustomerRepository  # noqa: E402
from app.domains.customers.infrastructure.persistence.sqlalchemy.models import CustomerModel  # noqa: E402, F401
from app.models.db.base import Base  # noqa: E402
from tests.utils import CustomerBuilder  # noqa: E402


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture
def db_url() -> str:
    """Return test database URL."""
    return os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest_asyncio.fixture
async def async_engine(db_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Create async database engine with a fresh schema."""
    engine = create_async_engine(
        db_url,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False} if db_url.startswith("sqlite") else {},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def async_session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory."""
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(async_session_factory) -> AsyncGenerator[AsyncSession, None]:
    """
    Create a fresh database session for each test.

    Each test gets its own session that is rolled back after the test completes.
    """
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


# ============================================================================
# REPOSITORY FIXTURES
# ============================================================================


@pytest.fixture
def mock_customer_repository() -> AsyncMock:
    """Create a mock customer repository (saves echo their argument)."""
    mock = AsyncMock(spec=ICustomerRepository)
    mock.find_by_id.return_value = None
    mock.find_by_id_including_deleted.return_value = None
    mock.find_by_email.return_value = None
    mock.exists_by_email.return_value = False
    mock.save.side_effect = lambda customer: customer
    mock.delete.return_value = True
    return mock


# ============================================================================
# DOMAIN FIXTURES
# ============================================================================


@pytest.fixture
def event_publisher() -> DomainEventPublisher:
    return DomainEventPublisher()


@pytest.fixture
def customer_builder() -> CustomerBuilder:
    return CustomerBuilder()


@pytest.fixture
def sample_customer():
    """Persisted active customer with a fitter."""
    return CustomerBuilder().with_id(1).with_fitter(7).build()
