from src.projectdesk.services.company_service import CompanyService
from src.projectdesk.services.document_storage import LocalDocumentStorage, UploadedDocument
from src.projectdesk.services.employee_service import EmployeeService
from src.projectdesk.services.project_commit_service import ProjectCommitService
from src.projectdesk.services.project_service import ProjectService
from src.projectdesk.services.project_wizard_service import ProjectWizardService

__all__ = [
    "CompanyService",
    "EmployeeService",
    "LocalDocumentStorage",
    "ProjectCommitService",
    "ProjectService",
    "ProjectWizardService",
    "UploadedDocument",
]
