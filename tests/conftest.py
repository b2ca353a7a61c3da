"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator, Generator
from datetime import UTC, datetime

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from testcontainers.postgres import PostgresContainer

from core.config import Settings
from models.base import Base
from services.feed_service import FeedAssembler
from services.store import SqlAlchemyFeedStore
from services.user_service import UserService
from tests.fakes import FakeClock, InMemoryFeedStore

TEST_SALT = "s3cr3t"
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Must be set before api.main is imported (db.session reads settings at import time).
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["MOVIE_MAGNET_BOT_SALT"] = TEST_SALT


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen at a fixed UTC instant."""
    return FakeClock(datetime(2024, 5, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def memory_store() -> InMemoryFeedStore:
    """Empty in-memory store."""
    return InMemoryFeedStore()


@pytest.fixture
def user_service(memory_store: InMemoryFeedStore, clock: FakeClock) -> UserService:
    """User service over the in-memory store."""
    return UserService(memory_store, salt=TEST_SALT, clock=clock)


@pytest.fixture
def feed_assembler(memory_store: InMemoryFeedStore, clock: FakeClock) -> FeedAssembler:
    """Feed assembler over the in-memory store."""
    return FeedAssembler(
        memory_store,
        feed_url="https://feeds.test/{}",
        title="Test Feed",
        page_size=3,
        clock=clock,
    )


@pytest.fixture
def test_settings() -> Settings:
    """Settings for API tests, independent of any local .env file."""
    return Settings(
        _env_file=None,
        database_url=TEST_DATABASE_URL,
        MOVIE_MAGNET_BOT_SALT=TEST_SALT,
        USER_FEED_URL="https://feeds.test/{}",
        USER_FEED_TITLE="Test Feed",
        ITEMS_PER_FEED=2,
    )


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer]:
    """Start a PostgreSQL container for the test session."""
    try:
        container = PostgresContainer("postgres:16", driver="asyncpg")
        container.start()
    except Exception as e:
        pytest.skip(f"PostgreSQL container unavailable (is Docker running?): {e}")
    yield container
    container.stop()


@pytest.fixture(params=["sqlite", "postgresql"])
def database_url(request: pytest.FixtureRequest) -> str:
    """
    Database URL for the store tests.

    Every database test runs twice: against in-memory SQLite and against the
    PostgreSQL container, which is what production uses.
    """
    if request.param == "sqlite":
        return TEST_DATABASE_URL
    return request.getfixturevalue("postgres_container").get_connection_url()


@pytest.fixture
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine]:
    """Create an async engine with all tables; tables are dropped afterwards."""
    if database_url.startswith("sqlite"):
        engine = create_async_engine(database_url, echo=False, poolclass=StaticPool)
    else:
        engine = create_async_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session on a fresh set of tables; every test gets its own engine."""
    session_factory = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_factory() as session:
        yield session


@pytest.fixture
def sql_store(db_session: AsyncSession) -> SqlAlchemyFeedStore:
    """SQLAlchemy store bound to the test session."""
    return SqlAlchemyFeedStore(db_session)


@pytest.fixture
async def client(
    db_session: AsyncSession,
    test_settings: Settings,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client with database session and settings overrides."""
    from core.config import get_settings

    get_settings.cache_clear()

    from api.main import app
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()
