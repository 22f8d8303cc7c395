"""Employee schemas for API request/response."""

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.projectdesk.models.employee import EMPLOYEE_NAME_MAX_LENGTH


class EmployeeCreate(BaseModel):
    """Schema for creating an employee."""

    first_name: str = Field(min_length=1, max_length=EMPLOYEE_NAME_MAX_LENGTH)
    second_name: str | None = Field(default=None, max_length=EMPLOYEE_NAME_MAX_LENGTH)
    last_name: str = Field(min_length=1, max_length=EMPLOYEE_NAME_MAX_LENGTH)
    email: EmailStr

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_required_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty or whitespace only")
        return v

    @field_validator("second_name")
    @classmethod
    def validate_second_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v


class EmployeeUpdate(BaseModel):
    """Schema for updating an employee. Omitted fields are left unchanged."""

    first_name: str | None = Field(default=None, min_length=1, max_length=EMPLOYEE_NAME_MAX_LENGTH)
    second_name: str | None = Field(default=None, max_length=EMPLOYEE_NAME_MAX_LENGTH)
    last_name: str | None = Field(default=None, min_length=1, max_length=EMPLOYEE_NAME_MAX_LENGTH)
    email: EmailStr | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_required_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Name cannot be empty or whitespace only")
        return v

    @field_validator("second_name")
    @classmethod
    def validate_second_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v


class EmployeeRead(BaseModel):
    """Schema for reading an employee."""

    id: int
    first_name: str
    second_name: str | None
    last_name: str
    full_name: str
    email: str

    model_config = {"from_attributes": True}


class EmployeeListRead(EmployeeRead):
    """Employee row in the listing, with the projects they head and staff."""

    managed_projects_count: int = 0
    assigned_projects_count: int = 0
