"""Repository for Company entity."""

from sqlmodel import func, select

from src.projectdesk.models import Company, Project
from src.projectdesk.repositories.base import BaseRepository


class CompanyRepository(BaseRepository[Company]):
    """Repository for Company entity."""

    model = Company

    async def list_with_project_counts(self) -> list[tuple[Company, int, int]]:
        """List all companies ordered by name, with their project counts.

        Returns:
            ``(company, projects_as_customer, projects_as_executor)`` rows.
        """
        as_customer = (
            select(func.count(Project.id))
            .where(Project.customer_company_id == Company.id)
            .correlate(Company)
            .scalar_subquery()
        )
        as_executor = (
            select(func.count(Project.id))
            .where(Project.executor_company_id == Company.id)
            .correlate(Company)
            .scalar_subquery()
        )
        result = await self.session.execute(
            select(Company, as_customer, as_executor).order_by(Company.name, Company.id)
        )
        return [(company, customer, executor) for company, customer, executor in result.all()]
