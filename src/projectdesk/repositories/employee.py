"""Repository for Employee entity."""

from sqlmodel import func, select

from src.projectdesk.models import Employee, Project, ProjectEmployeeLink
from src.projectdesk.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[Employee]):
    """Repository for Employee entity."""

    model = Employee

    async def list_with_project_counts(
        self, pattern: str | None = None
    ) -> list[tuple[Employee, int, int]]:
        """List employees ordered by last name, optionally filtered by name.

        Args:
            pattern: Case-insensitive fragment matched against first, second
                and last name concatenated, with spaces ignored.

        Returns:
            ``(employee, managed_projects, assigned_projects)`` rows, counting
            the projects the employee heads and the teams they belong to.
        """
        managed = (
            select(func.count(Project.id))
            .where(Project.head_id == Employee.id)
            .correlate(Employee)
            .scalar_subquery()
        )
        assigned = (
            select(func.count(ProjectEmployeeLink.project_id))
            .where(ProjectEmployeeLink.employee_id == Employee.id)
            .correlate(Employee)
            .scalar_subquery()
        )
        query = select(Employee, managed, assigned)
        if pattern and pattern.strip():
            needle = pattern.lower().replace(" ", "")
            full_name = func.lower(
                Employee.first_name + func.coalesce(Employee.second_name, "") + Employee.last_name
            )
            query = query.where(full_name.contains(needle))
        query = query.order_by(Employee.last_name, Employee.first_name, Employee.id)
        result = await self.session.execute(query)
        return [(employee, heads, staffs) for employee, heads, staffs in result.all()]

    async def list_by_project(self, project_id: int) -> list[Employee]:
        """List the team members of a project."""
        result = await self.session.execute(
            select(Employee)
            .join(ProjectEmployeeLink, ProjectEmployeeLink.employee_id == Employee.id)
            .where(ProjectEmployeeLink.project_id == project_id)
            .order_by(Employee.last_name, Employee.first_name, Employee.id)
        )
        return list(result.scalars().all())
