"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.projectdesk.api.dependencies.db import DBSession
from src.projectdesk.api.dependencies.repositories import (
    CompanyRepo,
    EmployeeRepo,
    ProjectDocumentRepo,
    ProjectRepo,
)
from src.projectdesk.api.dependencies.wizard import WizardStore
from src.projectdesk.core.config import get_settings
from src.projectdesk.services import (
    CompanyService,
    EmployeeService,
    LocalDocumentStorage,
    ProjectCommitService,
    ProjectService,
    ProjectWizardService,
)


def get_document_storage() -> LocalDocumentStorage:
    """Get document storage rooted at the configured upload root."""
    return LocalDocumentStorage(get_settings().upload_root)


DocumentStorage = Annotated[LocalDocumentStorage, Depends(get_document_storage)]


def get_company_service(company_repo: CompanyRepo, session: DBSession) -> CompanyService:
    return CompanyService(company_repo, session)


def get_employee_service(employee_repo: EmployeeRepo, session: DBSession) -> EmployeeService:
    return EmployeeService(employee_repo, session)


def get_project_service(
    project_repo: ProjectRepo,
    company_repo: CompanyRepo,
    employee_repo: EmployeeRepo,
    session: DBSession,
    storage: DocumentStorage,
) -> ProjectService:
    return ProjectService(project_repo, company_repo, employee_repo, session, storage)


def get_project_commit_service(
    project_repo: ProjectRepo,
    company_repo: CompanyRepo,
    employee_repo: EmployeeRepo,
    document_repo: ProjectDocumentRepo,
    session: DBSession,
    storage: DocumentStorage,
) -> ProjectCommitService:
    """Get the wizard commit service with retry settings from config."""
    settings = get_settings()
    return ProjectCommitService(
        project_repo,
        company_repo,
        employee_repo,
        document_repo,
        session,
        storage,
        max_attempts=settings.project_commit_max_attempts,
        retry_delay_seconds=settings.project_commit_retry_delay_seconds,
    )


ProjectCommitServiceDep = Annotated[ProjectCommitService, Depends(get_project_commit_service)]


def get_project_wizard_service(
    store: WizardStore,
    commit_service: ProjectCommitServiceDep,
) -> ProjectWizardService:
    return ProjectWizardService(store, commit_service)


CompanyServiceDep = Annotated[CompanyService, Depends(get_company_service)]
EmployeeServiceDep = Annotated[EmployeeService, Depends(get_employee_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
ProjectWizardServiceDep = Annotated[ProjectWizardService, Depends(get_project_wizard_service)]
