"""Base repository with common CRUD operations."""

from collections.abc import Sequence
from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, func, select

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: int) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    async def get_many_by_ids(self, ids: Sequence[int]) -> list[ModelType]:
        """Get all records whose primary key is in ``ids`` (missing ids are skipped)."""
        if not ids:
            return []
        result = await self.session.execute(
            select(self.model).where(self.model.id.in_(ids))  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def exists(self, id: int | None) -> bool:
        """Check whether a record with this primary key exists."""
        if id is None:
            return False
        result = await self.session.execute(
            select(func.count()).select_from(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one() > 0

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        """Mark entity for deletion (no flush/commit)."""
        await self.session.delete(entity)
