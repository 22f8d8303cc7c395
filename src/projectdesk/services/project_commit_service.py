"""Turns a completed wizard into a persisted project aggregate."""

import asyncio
from collections.abc import Collection, Sequence

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.projectdesk.core.db import UnitOfWork
from src.projectdesk.core.exceptions import (
    DocumentStorageError,
    ProjectCommitError,
    ReferenceNotFoundError,
    WizardValidationError,
)
from src.projectdesk.core.logging import get_logger
from src.projectdesk.models import Employee, Project, ProjectDocument
from src.projectdesk.repositories import (
    CompanyRepository,
    EmployeeRepository,
    ProjectDocumentRepository,
    ProjectRepository,
)
from src.projectdesk.schemas.wizard import WIZARD_LAST_STEP, WizardState
from src.projectdesk.services.document_storage import LocalDocumentStorage, UploadedDocument
from src.projectdesk.services.wizard.validation import validate_wizard_state

logger = get_logger(__name__)


class ProjectCommitService:
    """Creates a project, its team links and its documents in one unit of work.

    Either the whole aggregate is persisted and its files are on disk, or the
    transaction is rolled back and the files written so far are removed.
    Transient persistence errors (``OperationalError``, e.g. lock contention)
    are retried with a fresh unit of work; everything else fails immediately.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        company_repo: CompanyRepository,
        employee_repo: EmployeeRepository,
        document_repo: ProjectDocumentRepository,
        session: AsyncSession,
        storage: LocalDocumentStorage,
        max_attempts: int = 3,
        retry_delay_seconds: float = 1.0,
    ):
        self.project_repo = project_repo
        self.company_repo = company_repo
        self.employee_repo = employee_repo
        self.document_repo = document_repo
        self.session = session
        self.storage = storage
        self.max_attempts = max_attempts
        self.retry_delay_seconds = retry_delay_seconds

    async def commit(
        self,
        state: WizardState,
        documents: Sequence[UploadedDocument] = (),
    ) -> int:
        """Persist the wizard state as a new project.

        Once this returns the project is committed; nothing after it can undo
        the creation.

        Args:
            state: Wizard snapshot with every step filled in.
            documents: Uploaded files; zero-length ones are skipped.

        Returns:
            The id of the created project.

        Raises:
            WizardValidationError: If the state is incomplete or inconsistent.
            ProjectCommitError: If persisting or storing files failed.
        """
        errors = validate_wizard_state(state.model_copy(update={"current_step": WIZARD_LAST_STEP}))
        if errors:
            raise WizardValidationError(errors)

        attempt = 1
        while True:
            try:
                project_id = await self._commit_once(state, documents)
                break
            except OperationalError as e:
                if attempt >= self.max_attempts:
                    logger.error(
                        "Project commit failed after retries",
                        attempts=attempt,
                        error=str(e),
                    )
                    raise ProjectCommitError("Failed to persist project") from e
                logger.warning(
                    "Transient failure committing project, retrying",
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                    error=str(e),
                )
                attempt += 1
                await asyncio.sleep(self.retry_delay_seconds)

        logger.info(
            "Project created",
            project_id=project_id,
            team_size=len(state.employee_ids),
            documents=sum(1 for document in documents if document.size > 0),
            attempts=attempt,
        )
        return project_id

    async def _commit_once(
        self,
        state: WizardState,
        documents: Sequence[UploadedDocument],
    ) -> int:
        project_id: int | None = None
        try:
            async with UnitOfWork(self.session) as uow:
                await self._ensure_references_exist(state)
                team = await self._resolve_team(state.employee_ids)

                project = Project(
                    name=state.name,
                    start_date=state.start_date,
                    end_date=state.end_date,
                    priority=state.priority,
                    customer_company_id=state.customer_company_id,
                    executor_company_id=state.executor_company_id,
                    head_id=state.head_id,
                )
                project.employees = team
                self.project_repo.add(project)
                await uow.flush()
                project_id = project.id

                for document in documents:
                    if document.size == 0:
                        logger.debug("Skipping empty upload", file_name=document.file_name)
                        continue
                    stored = await self.storage.save(
                        project_id, document.file_name, document.stream
                    )
                    self.document_repo.add(
                        ProjectDocument(
                            project_id=project_id,
                            file_name=stored.file_name,
                            file_path=stored.relative_path,
                            file_size=stored.file_size,
                        )
                    )

                await uow.commit()
                return project_id

        except OperationalError:
            await self._discard_files(project_id)
            raise
        except ProjectCommitError:
            await self._discard_files(project_id)
            raise
        except (DocumentStorageError, SQLAlchemyError) as e:
            await self._discard_files(project_id)
            logger.error("Project commit failed", project_id=project_id, error=str(e))
            raise ProjectCommitError(str(e)) from e
        except Exception:
            await self._discard_files(project_id)
            raise

    async def _ensure_references_exist(self, state: WizardState) -> None:
        for company_id in (state.customer_company_id, state.executor_company_id):
            if not await self.company_repo.exists(company_id):
                raise ReferenceNotFoundError(f"Company {company_id} not found")
        if not await self.employee_repo.exists(state.head_id):
            raise ReferenceNotFoundError(f"Employee {state.head_id} not found")

    async def _resolve_team(self, employee_ids: Collection[int]) -> list[Employee]:
        employees = await self.employee_repo.get_many_by_ids(sorted(employee_ids))
        missing = set(employee_ids) - {employee.id for employee in employees}
        if missing:
            raise ReferenceNotFoundError(
                f"Employees not found: {', '.join(str(i) for i in sorted(missing))}"
            )
        return employees

    async def _discard_files(self, project_id: int | None) -> None:
        if project_id is not None:
            await self.storage.delete_project_files(project_id)
