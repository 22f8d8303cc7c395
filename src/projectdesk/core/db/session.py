"""Database session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import SQLModel

from src.projectdesk.core.db.engine import get_engine


@asynccontextmanager
async def get_session(
    engine: AsyncEngine | None = None,
) -> AsyncGenerator[AsyncSession]:
    """Create a database session.

    Args:
        engine: Optional engine override for testing.

    Yields:
        AsyncSession with expire_on_commit disabled, so entities stay readable
        after the service layer commits.
    """
    if engine is None:
        engine = get_engine()

    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """Create every table known to SQLModel metadata (local development and tests)."""
    # Register all tables on the metadata
    import src.projectdesk.models  # noqa: F401

    if engine is None:
        engine = get_engine()

    async with engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)
