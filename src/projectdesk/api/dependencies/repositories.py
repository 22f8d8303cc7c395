"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.projectdesk.api.dependencies.db import DBSession
from src.projectdesk.repositories import (
    CompanyRepository,
    EmployeeRepository,
    ProjectDocumentRepository,
    ProjectRepository,
)


def get_company_repository(session: DBSession) -> CompanyRepository:
    return CompanyRepository(session)


def get_employee_repository(session: DBSession) -> EmployeeRepository:
    return EmployeeRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_project_document_repository(session: DBSession) -> ProjectDocumentRepository:
    return ProjectDocumentRepository(session)


CompanyRepo = Annotated[CompanyRepository, Depends(get_company_repository)]
EmployeeRepo = Annotated[EmployeeRepository, Depends(get_employee_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
ProjectDocumentRepo = Annotated[ProjectDocumentRepository, Depends(get_project_document_repository)]
