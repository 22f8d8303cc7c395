"""Company schemas for API request/response."""

from pydantic import BaseModel, Field, field_validator

from src.projectdesk.models.company import COMPANY_NAME_MAX_LENGTH


def _clean_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Company name cannot be empty or whitespace only")
    return v


class CompanyCreate(BaseModel):
    """Schema for creating a company."""

    name: str = Field(min_length=1, max_length=COMPANY_NAME_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _clean_name(v)


class CompanyUpdate(BaseModel):
    """Schema for updating a company."""

    name: str | None = Field(default=None, min_length=1, max_length=COMPANY_NAME_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = _clean_name(v)
        return v


class CompanyRead(BaseModel):
    """Schema for reading a company."""

    id: int
    name: str

    model_config = {"from_attributes": True}


class CompanyListRead(CompanyRead):
    """Company row in the listing, with how many projects use it on each side."""

    projects_as_customer_count: int = 0
    projects_as_executor_count: int = 0
