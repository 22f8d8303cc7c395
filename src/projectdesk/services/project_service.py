"""Project management service - listing, editing and deletion.

Projects are only created through the wizard (see ProjectWizardService).
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.projectdesk.core.exceptions import (
    EntityNotFoundError,
    FieldError,
    FieldValidationError,
    ReferenceConflictError,
)
from src.projectdesk.core.logging import get_logger
from src.projectdesk.models import Employee, Project
from src.projectdesk.repositories import CompanyRepository, EmployeeRepository, ProjectRepository
from src.projectdesk.schemas.project import ProjectFilter, ProjectUpdate
from src.projectdesk.schemas.wizard import WIZARD_LAST_STEP, WizardState
from src.projectdesk.services.document_storage import LocalDocumentStorage
from src.projectdesk.services.wizard.validation import validate_wizard_state

logger = get_logger(__name__)


class ProjectService:
    """Service for project operations outside the creation wizard."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        company_repo: CompanyRepository,
        employee_repo: EmployeeRepository,
        session: AsyncSession,
        storage: LocalDocumentStorage,
    ):
        self.project_repo = project_repo
        self.company_repo = company_repo
        self.employee_repo = employee_repo
        self.session = session
        self.storage = storage

    async def list_projects(self, filters: ProjectFilter) -> list[Project]:
        return await self.project_repo.list_filtered(filters)

    async def get_project(self, project_id: int) -> Project:
        project = await self.project_repo.get_with_relations(project_id)
        if project is None:
            raise EntityNotFoundError(f"Project {project_id} not found")
        return project

    async def list_team(self, project_id: int) -> list[Employee]:
        if not await self.project_repo.exists(project_id):
            raise EntityNotFoundError(f"Project {project_id} not found")
        return await self.employee_repo.list_by_project(project_id)

    async def update_project(self, project_id: int, data: ProjectUpdate) -> Project:
        """Apply a partial update, enforcing the same rules as project creation.

        Raises:
            EntityNotFoundError: If the project does not exist.
            FieldValidationError: If the merged project breaks a rule or
                references a missing company or employee.
        """
        project = await self.get_project(project_id)
        changes = data.model_dump(exclude_unset=True, exclude={"employee_ids"})
        changes = {field: value for field, value in changes.items() if value is not None}

        merged = WizardState(
            name=changes.get("name", project.name),
            start_date=changes.get("start_date", project.start_date),
            end_date=changes.get("end_date", project.end_date),
            priority=changes.get("priority", project.priority),
            customer_company_id=changes.get("customer_company_id", project.customer_company_id),
            executor_company_id=changes.get("executor_company_id", project.executor_company_id),
            head_id=changes.get("head_id", project.head_id),
            current_step=WIZARD_LAST_STEP,
        )
        errors = validate_wizard_state(merged)
        errors.extend(await self._missing_references(changes))

        team: list[Employee] | None = None
        if data.employee_ids is not None:
            team = await self.employee_repo.get_many_by_ids(sorted(set(data.employee_ids)))
            missing = set(data.employee_ids) - {employee.id for employee in team}
            if missing:
                errors.append(
                    FieldError(
                        "employee_ids",
                        f"Employees not found: {', '.join(str(i) for i in sorted(missing))}",
                    )
                )

        if errors:
            raise FieldValidationError(errors)

        for field, value in changes.items():
            setattr(project, field, value)
        if team is not None:
            project.employees = team

        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ReferenceConflictError("Project update conflicts with existing data") from e
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Project updated", project_id=project_id, fields=sorted(changes))
        return await self.get_project(project_id)

    async def delete_project(self, project_id: int) -> None:
        """Delete a project with its documents, then remove its files."""
        project = await self.get_project(project_id)
        await self.project_repo.delete(project)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ReferenceConflictError("Cannot delete project due to existing references") from e
        except Exception:
            await self.session.rollback()
            raise

        await self.storage.delete_project_files(project_id)
        logger.info("Project deleted", project_id=project_id)

    async def _missing_references(self, changes: dict) -> list[FieldError]:
        errors: list[FieldError] = []
        for field, label in (
            ("customer_company_id", "Customer company"),
            ("executor_company_id", "Executor company"),
        ):
            if field in changes and not await self.company_repo.exists(changes[field]):
                errors.append(FieldError(field, f"{label} not found"))
        if "head_id" in changes and not await self.employee_repo.exists(changes["head_id"]):
            errors.append(FieldError("head_id", "Head not found"))
        return errors
