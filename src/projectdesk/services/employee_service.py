"""Employee management service."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.projectdesk.core.exceptions import EntityNotFoundError, ReferenceConflictError
from src.projectdesk.core.logging import get_logger
from src.projectdesk.models import Employee
from src.projectdesk.repositories import EmployeeRepository
from src.projectdesk.schemas.employee import EmployeeCreate, EmployeeUpdate

logger = get_logger(__name__)


class EmployeeService:
    """Service for employee operations."""

    def __init__(self, employee_repo: EmployeeRepository, session: AsyncSession):
        self.employee_repo = employee_repo
        self.session = session

    async def list_employees(self, pattern: str | None = None) -> list[tuple[Employee, int, int]]:
        """List employees with the number of projects they head and staff."""
        return await self.employee_repo.list_with_project_counts(pattern)

    async def get_employee(self, employee_id: int) -> Employee:
        employee = await self.employee_repo.get_by_id(employee_id)
        if employee is None:
            raise EntityNotFoundError(f"Employee {employee_id} not found")
        return employee

    async def create_employee(self, data: EmployeeCreate) -> Employee:
        employee = Employee(
            first_name=data.first_name,
            second_name=data.second_name,
            last_name=data.last_name,
            email=str(data.email),
        )
        self.employee_repo.add(employee)
        try:
            await self.session.commit()
            await self.session.refresh(employee)
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Employee created", employee_id=employee.id)
        return employee

    async def update_employee(self, employee_id: int, data: EmployeeUpdate) -> Employee:
        employee = await self.get_employee(employee_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("email") is not None:
            changes["email"] = str(changes["email"])
        for field, value in changes.items():
            if value is None and field != "second_name":
                continue
            setattr(employee, field, value)
        try:
            await self.session.commit()
            await self.session.refresh(employee)
        except Exception:
            await self.session.rollback()
            raise
        return employee

    async def delete_employee(self, employee_id: int) -> None:
        """Delete an employee.

        Raises:
            EntityNotFoundError: If the employee does not exist.
            ReferenceConflictError: If the employee heads or is assigned to a project.
        """
        employee = await self.get_employee(employee_id)
        await self.employee_repo.delete(employee)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ReferenceConflictError(
                "Cannot delete employee while projects reference them"
            ) from e
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Employee deleted", employee_id=employee_id)
