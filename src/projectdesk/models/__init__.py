"""Model exports.

Import from here: `from src.projectdesk.models import Project, Company`
"""

from src.projectdesk.models.company import Company
from src.projectdesk.models.employee import Employee
from src.projectdesk.models.project import (
    MAX_PRIORITY,
    MIN_PRIORITY,
    PROJECT_NAME_MAX_LENGTH,
    Project,
    ProjectDocument,
    ProjectEmployeeLink,
)

__all__ = [
    # Reference data
    "Company",
    "Employee",
    # Project aggregate
    "Project",
    "ProjectDocument",
    "ProjectEmployeeLink",
    # Constraints
    "MAX_PRIORITY",
    "MIN_PRIORITY",
    "PROJECT_NAME_MAX_LENGTH",
]
