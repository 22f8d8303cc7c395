"""Company model - customer or executor of projects."""

from sqlmodel import Field, SQLModel

COMPANY_NAME_MAX_LENGTH = 50


class Company(SQLModel, table=True):
    """Company referenced by projects as customer or executor.

    Deletion is restricted while any project references the company.
    """

    __tablename__ = "companies"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=COMPANY_NAME_MAX_LENGTH, index=True)
