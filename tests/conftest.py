"""Root test fixtures shared across all test types.

The database is a throwaway SQLite file per test, so these fixtures need no
external services. Redis is replaced by fakeredis or reported as unavailable.
"""

import os

os.environ.setdefault("APP_ENV", "testing")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fakeredis import aioredis as fakeredis_aio
from httpx import ASGITransport, AsyncClient
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.pool import NullPool

from src.projectdesk.api.dependencies import get_document_storage
from src.projectdesk.core import redis as redis_core
from src.projectdesk.core.config import get_settings
from src.projectdesk.core.db import create_all_tables, create_engine_for_url, get_session
from src.projectdesk.core.db import engine as engine_module
from src.projectdesk.main import create_app
from src.projectdesk.services import LocalDocumentStorage
from tests.helpers import seed_reference_data

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()

# Modules that import get_redis directly
REDIS_CONSUMERS = (
    "src.projectdesk.core.redis",
    "src.projectdesk.api.dependencies.wizard",
    "src.projectdesk.main",
)


@pytest.fixture(autouse=True)
async def _reset_redis_between_tests() -> AsyncGenerator[None]:
    """Reset Redis state so no client outlives its event loop."""
    await redis_core.close_redis()
    yield
    await redis_core.close_redis()


# --- Redis Test Fixtures ---


@pytest.fixture
async def fake_redis() -> AsyncGenerator[Redis]:
    """Provides a fakeredis client for testing.

    Returns an in-memory Redis implementation that behaves like
    a real Redis server but doesn't require external dependencies.
    """
    client = fakeredis_aio.FakeRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
async def mock_redis(fake_redis: Redis, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[Redis]:
    """Patches get_redis() to return the fakeredis client everywhere."""

    async def _get_fake_redis() -> Redis:
        return fake_redis

    for module in REDIS_CONSUMERS:
        monkeypatch.setattr(f"{module}.get_redis", _get_fake_redis)
    yield fake_redis


@pytest.fixture
async def mock_redis_unavailable(monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[None]:
    """Patches get_redis() to return None (simulates Redis unavailable).

    The wizard then keeps its state in the cookie session.
    """

    async def _get_none() -> None:
        return None

    for module in REDIS_CONSUMERS:
        monkeypatch.setattr(f"{module}.get_redis", _get_none)
    yield


# --- Database Fixtures ---


@pytest.fixture
async def engine(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[AsyncEngine]:
    """Create a SQLite database with all tables and install it as the app engine."""
    await engine_module.dispose_engine()

    test_engine = create_engine_for_url(
        f"sqlite+aiosqlite:///{tmp_path / 'projectdesk.db'}",
        poolclass=NullPool,
    )
    await create_all_tables(test_engine)
    monkeypatch.setattr(engine_module, "_engine", test_engine)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    Tests must explicitly call `await session.commit()` to persist changes.
    """
    async with get_session(engine) as session:
        yield session


@pytest.fixture
async def reference_data(db_session: AsyncSession) -> None:
    """Two companies and two employees with fixed ids (see tests.helpers)."""
    await seed_reference_data(db_session)


@pytest.fixture
def storage(tmp_path: Path) -> LocalDocumentStorage:
    return LocalDocumentStorage(tmp_path / "wwwroot")


# --- HTTP Client Fixtures ---


@pytest.fixture
async def client(
    engine: AsyncEngine,
    storage: LocalDocumentStorage,
    mock_redis_unavailable: None,
) -> AsyncGenerator[AsyncClient]:
    """Test client whose wizard state lives in the cookie session."""
    app = create_app()
    app.dependency_overrides[get_document_storage] = lambda: storage
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        follow_redirects=False,
    ) as client:
        yield client


@pytest.fixture
async def redis_client(
    engine: AsyncEngine,
    storage: LocalDocumentStorage,
    mock_redis: Redis,
) -> AsyncGenerator[AsyncClient]:
    """Test client whose wizard state lives in (fake) Redis."""
    app = create_app()
    app.dependency_overrides[get_document_storage] = lambda: storage
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        follow_redirects=False,
    ) as client:
        yield client
