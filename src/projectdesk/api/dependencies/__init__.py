"""FastAPI dependency injection definitions."""

from src.projectdesk.api.dependencies.db import DBSession, get_db_session
from src.projectdesk.api.dependencies.repositories import (
    CompanyRepo,
    EmployeeRepo,
    ProjectDocumentRepo,
    ProjectRepo,
    get_company_repository,
    get_employee_repository,
    get_project_document_repository,
    get_project_repository,
)
from src.projectdesk.api.dependencies.services import (
    CompanyServiceDep,
    DocumentStorage,
    EmployeeServiceDep,
    ProjectCommitServiceDep,
    ProjectServiceDep,
    ProjectWizardServiceDep,
    get_company_service,
    get_document_storage,
    get_employee_service,
    get_project_commit_service,
    get_project_service,
    get_project_wizard_service,
)
from src.projectdesk.api.dependencies.wizard import WizardStore, get_wizard_state_store

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Repositories
    "CompanyRepo",
    "EmployeeRepo",
    "ProjectDocumentRepo",
    "ProjectRepo",
    "get_company_repository",
    "get_employee_repository",
    "get_project_document_repository",
    "get_project_repository",
    # Services
    "CompanyServiceDep",
    "DocumentStorage",
    "EmployeeServiceDep",
    "ProjectCommitServiceDep",
    "ProjectServiceDep",
    "ProjectWizardServiceDep",
    "get_company_service",
    "get_document_storage",
    "get_employee_service",
    "get_project_commit_service",
    "get_project_service",
    "get_project_wizard_service",
    # Wizard
    "WizardStore",
    "get_wizard_state_store",
]
