"""Test helper functions for common data creation patterns."""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlmodel import SQLModel, func, select

from src.projectdesk.core.db import get_session
from src.projectdesk.models import Company, Employee, Project
from tests.factories import ProjectFactory

CUSTOMER_ID = 101
EXECUTOR_ID = 102
HEAD_ID = 201
MEMBER_ID = 202


async def seed_reference_data(session: AsyncSession) -> None:
    """Insert two companies and two employees with fixed ids."""
    session.add_all(
        [
            Company(id=CUSTOMER_ID, name="Acme"),
            Company(id=EXECUTOR_ID, name="Globex"),
            Employee(
                id=HEAD_ID,
                first_name="Ada",
                last_name="Lovelace",
                email="ada.lovelace@example.com",
            ),
            Employee(
                id=MEMBER_ID,
                first_name="Grace",
                second_name="Brewster",
                last_name="Hopper",
                email="grace.hopper@example.com",
            ),
        ]
    )
    await session.commit()


async def create_project(session: AsyncSession, **kwargs) -> Project:
    """Create a project between the seeded companies, headed by HEAD_ID.

    Args:
        session: Database session
        **kwargs: Overrides passed to ProjectFactory
    """
    values = {
        "customer_company_id": CUSTOMER_ID,
        "executor_company_id": EXECUTOR_ID,
        "head_id": HEAD_ID,
        **kwargs,
    }
    project = ProjectFactory.build(**values)
    session.add(project)
    await session.commit()
    await session.refresh(project)
    return project


async def count_rows(engine: AsyncEngine, model: type[SQLModel]) -> int:
    """Count rows of a table in a fresh session."""
    async with get_session(engine) as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()
