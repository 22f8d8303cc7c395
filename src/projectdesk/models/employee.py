"""Employee model - project heads and team members."""

from sqlmodel import Field, SQLModel

EMPLOYEE_NAME_MAX_LENGTH = 50


class Employee(SQLModel, table=True):
    """Employee that can head projects or be assigned to project teams."""

    __tablename__ = "employees"

    id: int | None = Field(default=None, primary_key=True)
    first_name: str = Field(max_length=EMPLOYEE_NAME_MAX_LENGTH)
    second_name: str | None = Field(default=None, max_length=EMPLOYEE_NAME_MAX_LENGTH)
    last_name: str = Field(max_length=EMPLOYEE_NAME_MAX_LENGTH, index=True)
    email: str = Field(max_length=254)

    @property
    def full_name(self) -> str:
        parts = [self.first_name, self.second_name, self.last_name]
        return " ".join(part for part in parts if part)
