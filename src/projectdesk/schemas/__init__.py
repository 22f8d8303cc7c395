from src.projectdesk.schemas.company import (
    CompanyCreate,
    CompanyListRead,
    CompanyRead,
    CompanyUpdate,
)
from src.projectdesk.schemas.employee import (
    EmployeeCreate,
    EmployeeListRead,
    EmployeeRead,
    EmployeeUpdate,
)
from src.projectdesk.schemas.project import (
    ProjectDocumentRead,
    ProjectFilter,
    ProjectRead,
    ProjectSortOrder,
    ProjectUpdate,
)
from src.projectdesk.schemas.wizard import (
    FieldErrorRead,
    WizardFields,
    WizardState,
    WizardStepResponse,
)

__all__ = [
    # Company
    "CompanyCreate",
    "CompanyListRead",
    "CompanyRead",
    "CompanyUpdate",
    # Employee
    "EmployeeCreate",
    "EmployeeListRead",
    "EmployeeRead",
    "EmployeeUpdate",
    # Project
    "ProjectDocumentRead",
    "ProjectFilter",
    "ProjectRead",
    "ProjectSortOrder",
    "ProjectUpdate",
    # Wizard
    "FieldErrorRead",
    "WizardFields",
    "WizardState",
    "WizardStepResponse",
]
