"""Explicit transaction scope over an AsyncSession."""

from types import TracebackType
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession

from src.projectdesk.core.logging import get_logger

logger = get_logger(__name__)


class UnitOfWork:
    """A scoped transaction handle.

    Everything done through ``session`` inside the ``async with`` block is
    rolled back on exit unless ``commit()`` succeeded, whether the block exits
    with an exception or returns early.

    Usage:
        async with UnitOfWork(session) as uow:
            uow.session.add(entity)
            await uow.flush()
            await uow.commit()
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self._committed = False

    @property
    def committed(self) -> bool:
        return self._committed

    async def __aenter__(self) -> Self:
        self._committed = False
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._committed:
            return
        await self.session.rollback()
        if exc is None:
            logger.debug("Unit of work exited without commit, rolled back")

    async def flush(self) -> None:
        await self.session.flush()

    async def commit(self) -> None:
        await self.session.commit()
        self._committed = True
