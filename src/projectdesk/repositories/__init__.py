"""Repository layer - data access abstraction."""

from src.projectdesk.repositories.base import BaseRepository
from src.projectdesk.repositories.company import CompanyRepository
from src.projectdesk.repositories.employee import EmployeeRepository
from src.projectdesk.repositories.project import ProjectDocumentRepository, ProjectRepository

__all__ = [
    "BaseRepository",
    "CompanyRepository",
    "EmployeeRepository",
    "ProjectDocumentRepository",
    "ProjectRepository",
]
