"""Employee endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.projectdesk.api.dependencies import EmployeeServiceDep
from src.projectdesk.schemas.employee import (
    EmployeeCreate,
    EmployeeListRead,
    EmployeeRead,
    EmployeeUpdate,
)

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get(
    "",
    response_model=list[EmployeeListRead],
    summary="List employees",
    description=(
        "List employees ordered by last name. `q` filters on the full name, "
        "case-insensitively and ignoring spaces. Each row counts the projects the "
        "employee heads and the project teams they belong to."
    ),
)
async def list_employees(
    service: EmployeeServiceDep,
    q: Annotated[str | None, Query(max_length=100, description="Name search")] = None,
) -> list[EmployeeListRead]:
    return [
        EmployeeListRead.model_validate(employee).model_copy(
            update={"managed_projects_count": managed, "assigned_projects_count": assigned}
        )
        for employee, managed, assigned in await service.list_employees(q)
    ]


@router.get(
    "/{employee_id}",
    response_model=EmployeeRead,
    summary="Get employee",
    responses={
        200: {"description": "Employee details"},
        404: {"description": "Employee not found"},
    },
)
async def get_employee(employee_id: int, service: EmployeeServiceDep) -> EmployeeRead:
    return EmployeeRead.model_validate(await service.get_employee(employee_id))


@router.post(
    "",
    response_model=EmployeeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create employee",
)
async def create_employee(request: EmployeeCreate, service: EmployeeServiceDep) -> EmployeeRead:
    return EmployeeRead.model_validate(await service.create_employee(request))


@router.patch(
    "/{employee_id}",
    response_model=EmployeeRead,
    summary="Update employee",
    responses={
        200: {"description": "Employee updated"},
        404: {"description": "Employee not found"},
    },
)
async def update_employee(
    employee_id: int,
    request: EmployeeUpdate,
    service: EmployeeServiceDep,
) -> EmployeeRead:
    return EmployeeRead.model_validate(await service.update_employee(employee_id, request))


@router.delete(
    "/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete employee",
    description="Delete an employee. Fails while they head or staff a project.",
    responses={
        204: {"description": "Employee deleted"},
        404: {"description": "Employee not found"},
        409: {"description": "Employee is referenced by a project"},
    },
)
async def delete_employee(employee_id: int, service: EmployeeServiceDep) -> None:
    await service.delete_employee(employee_id)
