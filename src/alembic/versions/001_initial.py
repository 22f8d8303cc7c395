"""Initial schema: companies, employees, projects, team links and documents

Revision ID: 001
Revises:
Create Date: 2026-10-16 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

SEED_COMPANIES = [
    {"id": 101, "name": "Smoothie"},
    {"id": 102, "name": "F-and-K"},
    {"id": 103, "name": "Pantheon"},
    {"id": 104, "name": "Gray Book"},
]

SEED_EMPLOYEES = [
    {"id": 101, "first_name": "Bob", "last_name": "Bobson", "email": "bob.bobson@example.com"},
    {"id": 102, "first_name": "Alice", "last_name": "Zoe", "email": "alice.braus@example.com"},
    {
        "id": 103,
        "first_name": "Catalina",
        "last_name": "Braus",
        "email": "catalina.braus@example.com",
    },
    {
        "id": 104,
        "first_name": "Burt",
        "last_name": "Ackermann",
        "email": "burt.ackermann@example.com",
    },
    {
        "id": 105,
        "first_name": "Camille",
        "last_name": "Sadies",
        "email": "camille.sadies@example.com",
    },
    {"id": 106, "first_name": "Steven", "last_name": "House", "email": "steven.house@example.com"},
    {
        "id": 107,
        "first_name": "Albert",
        "last_name": "Hoking",
        "email": "albert.hoking@example.com",
    },
]


def upgrade() -> None:
    companies = op.create_table(
        "companies",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_companies_name", "companies", ["name"], unique=False)

    employees = op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("first_name", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("second_name", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column("last_name", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("email", sqlmodel.sql.sqltypes.AutoString(length=254), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_employees_last_name", "employees", ["last_name"], unique=False)

    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False),
        sa.Column("customer_company_id", sa.Integer(), nullable=False),
        sa.Column("executor_company_id", sa.Integer(), nullable=False),
        sa.Column("head_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["customer_company_id"], ["companies.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["executor_company_id"], ["companies.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["head_id"], ["employees.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_name", "projects", ["name"], unique=False)
    op.create_index("ix_projects_start_date", "projects", ["start_date"], unique=False)
    op.create_index("ix_projects_end_date", "projects", ["end_date"], unique=False)
    op.create_index(
        "ix_projects_customer_company_id", "projects", ["customer_company_id"], unique=False
    )
    op.create_index(
        "ix_projects_executor_company_id", "projects", ["executor_company_id"], unique=False
    )
    op.create_index("ix_projects_head_id", "projects", ["head_id"], unique=False)

    op.create_table(
        "project_employees",
        sa.Column("project_id", sa.Integer(), nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("project_id", "employee_id"),
    )

    op.create_table(
        "project_documents",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("project_id", sa.Integer(), nullable=False),
        sa.Column("file_name", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("file_path", sqlmodel.sql.sqltypes.AutoString(length=512), nullable=False),
        sa.Column("file_size", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("file_path"),
    )
    op.create_index(
        "ix_project_documents_project_id", "project_documents", ["project_id"], unique=False
    )

    op.bulk_insert(companies, SEED_COMPANIES)
    op.bulk_insert(employees, [{"second_name": None, **row} for row in SEED_EMPLOYEES])

    # Seed rows use explicit ids; move PostgreSQL sequences past them
    if op.get_bind().dialect.name == "postgresql":
        for table in ("companies", "employees"):
            op.execute(
                f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), "
                f"(SELECT MAX(id) FROM {table}))"
            )


def downgrade() -> None:
    op.drop_index("ix_project_documents_project_id", table_name="project_documents")
    op.drop_table("project_documents")
    op.drop_table("project_employees")
    op.drop_index("ix_projects_head_id", table_name="projects")
    op.drop_index("ix_projects_executor_company_id", table_name="projects")
    op.drop_index("ix_projects_customer_company_id", table_name="projects")
    op.drop_index("ix_projects_end_date", table_name="projects")
    op.drop_index("ix_projects_start_date", table_name="projects")
    op.drop_index("ix_projects_name", table_name="projects")
    op.drop_table("projects")
    op.drop_index("ix_employees_last_name", table_name="employees")
    op.drop_table("employees")
    op.drop_index("ix_companies_name", table_name="companies")
    op.drop_table("companies")
