"""Project aggregate - project, team links and owned documents."""

from datetime import date, datetime

from sqlmodel import Field, Relationship, SQLModel

from src.projectdesk.models.base import utc_now
from src.projectdesk.models.company import Company
from src.projectdesk.models.employee import Employee

PROJECT_NAME_MAX_LENGTH = 100
MIN_PRIORITY = 1
MAX_PRIORITY = 10


class ProjectEmployeeLink(SQLModel, table=True):
    """Team membership (many-to-many between projects and employees)."""

    __tablename__ = "project_employees"

    project_id: int = Field(foreign_key="projects.id", primary_key=True, ondelete="CASCADE")
    employee_id: int = Field(foreign_key="employees.id", primary_key=True, ondelete="RESTRICT")


class Project(SQLModel, table=True):
    """Project aggregate root.

    Companies and the head are non-owning references (RESTRICT on delete).
    Documents are owned and removed together with the project.
    """

    __tablename__ = "projects"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=PROJECT_NAME_MAX_LENGTH, index=True)
    start_date: date = Field(index=True)
    end_date: date = Field(index=True)
    priority: int
    customer_company_id: int = Field(foreign_key="companies.id", ondelete="RESTRICT", index=True)
    executor_company_id: int = Field(foreign_key="companies.id", ondelete="RESTRICT", index=True)
    head_id: int = Field(foreign_key="employees.id", ondelete="RESTRICT", index=True)
    created_at: datetime = Field(default_factory=utc_now)

    customer_company: Company | None = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[Project.customer_company_id]"}
    )
    executor_company: Company | None = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[Project.executor_company_id]"}
    )
    head: Employee | None = Relationship(
        sa_relationship_kwargs={"foreign_keys": "[Project.head_id]"}
    )
    employees: list[Employee] = Relationship(link_model=ProjectEmployeeLink)
    documents: list["ProjectDocument"] = Relationship(
        back_populates="project",
        cascade_delete=True,
        sa_relationship_kwargs={"order_by": "ProjectDocument.id"},
    )


class ProjectDocument(SQLModel, table=True):
    """File uploaded while creating a project.

    ``file_path`` is relative to the upload root and unique per upload.
    """

    __tablename__ = "project_documents"

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    file_name: str = Field(max_length=255)
    file_path: str = Field(max_length=512, unique=True)
    file_size: int

    project: Project | None = Relationship(back_populates="documents")
