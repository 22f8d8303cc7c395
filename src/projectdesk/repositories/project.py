"""Repositories for the Project aggregate."""

from sqlalchemy.orm import selectinload
from sqlmodel import select

from src.projectdesk.models import Project, ProjectDocument
from src.projectdesk.repositories.base import BaseRepository
from src.projectdesk.schemas.project import ProjectFilter, ProjectSortOrder

_SORT_COLUMNS = {
    ProjectSortOrder.NAME: Project.name,
    ProjectSortOrder.NAME_DESC: Project.name.desc(),  # type: ignore[attr-defined]
    ProjectSortOrder.START_DATE: Project.start_date,
    ProjectSortOrder.START_DATE_DESC: Project.start_date.desc(),  # type: ignore[attr-defined]
    ProjectSortOrder.END_DATE: Project.end_date,
    ProjectSortOrder.END_DATE_DESC: Project.end_date.desc(),  # type: ignore[attr-defined]
    ProjectSortOrder.PRIORITY: Project.priority,
    ProjectSortOrder.PRIORITY_DESC: Project.priority.desc(),  # type: ignore[attr-defined]
}


def _with_relations(query):
    return query.options(
        selectinload(Project.customer_company),  # type: ignore[arg-type]
        selectinload(Project.executor_company),  # type: ignore[arg-type]
        selectinload(Project.head),  # type: ignore[arg-type]
        selectinload(Project.employees),  # type: ignore[arg-type]
        selectinload(Project.documents),  # type: ignore[arg-type]
    )


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project aggregate roots."""

    model = Project

    async def get_with_relations(self, id: int) -> Project | None:
        """Get a project with companies, head, team and documents loaded."""
        result = await self.session.execute(
            _with_relations(select(Project).where(Project.id == id)).execution_options(
                populate_existing=True
            )
        )
        return result.scalar_one_or_none()

    async def list_filtered(self, filters: ProjectFilter) -> list[Project]:
        """List projects matching the filter, in the requested order."""
        query = _with_relations(select(Project))

        if filters.start_date_from is not None:
            query = query.where(Project.start_date >= filters.start_date_from)
        if filters.start_date_to is not None:
            query = query.where(Project.start_date <= filters.start_date_to)
        if filters.end_date_from is not None:
            query = query.where(Project.end_date >= filters.end_date_from)
        if filters.end_date_to is not None:
            query = query.where(Project.end_date <= filters.end_date_to)
        if filters.priority is not None:
            query = query.where(Project.priority == filters.priority)
        if filters.customer_company_id is not None:
            query = query.where(Project.customer_company_id == filters.customer_company_id)
        if filters.executor_company_id is not None:
            query = query.where(Project.executor_company_id == filters.executor_company_id)

        query = query.order_by(_SORT_COLUMNS[filters.sort_order], Project.id)
        result = await self.session.execute(query)
        return list(result.scalars().all())


class ProjectDocumentRepository(BaseRepository[ProjectDocument]):
    """Repository for documents owned by projects."""

    model = ProjectDocument

    async def list_by_project(self, project_id: int) -> list[ProjectDocument]:
        result = await self.session.execute(
            select(ProjectDocument)
            .where(ProjectDocument.project_id == project_id)
            .order_by(ProjectDocument.id)
        )
        return list(result.scalars().all())
