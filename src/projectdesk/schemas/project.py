"""Project schemas for API request/response."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from src.projectdesk.models.project import MAX_PRIORITY, MIN_PRIORITY, PROJECT_NAME_MAX_LENGTH
from src.projectdesk.schemas.company import CompanyRead
from src.projectdesk.schemas.employee import EmployeeRead


class ProjectSortOrder(str, Enum):
    """Sort orders accepted by the project listing."""

    NAME = "name"
    NAME_DESC = "name_desc"
    START_DATE = "start_date"
    START_DATE_DESC = "start_date_desc"
    END_DATE = "end_date"
    END_DATE_DESC = "end_date_desc"
    PRIORITY = "priority"
    PRIORITY_DESC = "priority_desc"


class ProjectFilter(BaseModel):
    """Query parameters for listing projects."""

    start_date_from: date | None = None
    start_date_to: date | None = None
    end_date_from: date | None = None
    end_date_to: date | None = None
    priority: int | None = Field(default=None, ge=MIN_PRIORITY, le=MAX_PRIORITY)
    customer_company_id: int | None = None
    executor_company_id: int | None = None
    sort_order: ProjectSortOrder = ProjectSortOrder.NAME


class ProjectUpdate(BaseModel):
    """Schema for updating a project. Omitted fields are left unchanged.

    Cross-field rules (end after start, customer differs from executor) are
    checked by the service against the merged values.
    """

    name: str | None = Field(default=None, min_length=1, max_length=PROJECT_NAME_MAX_LENGTH)
    start_date: date | None = None
    end_date: date | None = None
    priority: int | None = Field(default=None, ge=MIN_PRIORITY, le=MAX_PRIORITY)
    customer_company_id: int | None = None
    executor_company_id: int | None = None
    head_id: int | None = None
    employee_ids: list[int] | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Project name cannot be empty or whitespace only")
        return v


class ProjectDocumentRead(BaseModel):
    """Schema for reading a project document."""

    id: int
    file_name: str
    file_path: str
    file_size: int

    model_config = {"from_attributes": True}


class ProjectRead(BaseModel):
    """Schema for reading a project with its references."""

    id: int
    name: str
    start_date: date
    end_date: date
    priority: int
    customer_company_id: int
    executor_company_id: int
    head_id: int
    created_at: datetime
    customer_company: CompanyRead | None = None
    executor_company: CompanyRead | None = None
    head: EmployeeRead | None = None
    employees: list[EmployeeRead] = []
    documents: list[ProjectDocumentRead] = []

    model_config = {"from_attributes": True}
