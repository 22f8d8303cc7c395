"""Project endpoints - listing, details, editing and deletion.

New projects are created through the wizard endpoints in project_wizard.py.
"""

from typing import Annotated

from fastapi import APIRouter, Query, status

from src.projectdesk.api.dependencies import ProjectServiceDep
from src.projectdesk.schemas.employee import EmployeeRead
from src.projectdesk.schemas.project import ProjectFilter, ProjectRead, ProjectUpdate

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=list[ProjectRead],
    summary="List projects",
    description="List projects, filtered by date range, priority and companies.",
    responses={
        200: {"description": "Projects matching the filters"},
    },
)
async def list_projects(
    service: ProjectServiceDep,
    filters: Annotated[ProjectFilter, Query()],
) -> list[ProjectRead]:
    projects = await service.list_projects(filters)
    return [ProjectRead.model_validate(p) for p in projects]


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    description="Get a project with its companies, head, team and documents.",
    responses={
        200: {"description": "Project details"},
        404: {"description": "Project not found"},
    },
)
async def get_project(project_id: int, service: ProjectServiceDep) -> ProjectRead:
    return ProjectRead.model_validate(await service.get_project(project_id))


@router.get(
    "/{project_id}/employees",
    response_model=list[EmployeeRead],
    summary="List project team",
    responses={
        200: {"description": "Team members"},
        404: {"description": "Project not found"},
    },
)
async def list_project_employees(
    project_id: int,
    service: ProjectServiceDep,
) -> list[EmployeeRead]:
    employees = await service.list_team(project_id)
    return [EmployeeRead.model_validate(e) for e in employees]


@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    description="Partially update a project. The creation rules apply to the merged result.",
    responses={
        200: {"description": "Project updated"},
        404: {"description": "Project not found"},
        422: {"description": "Merged project is invalid"},
    },
)
async def update_project(
    project_id: int,
    request: ProjectUpdate,
    service: ProjectServiceDep,
) -> ProjectRead:
    return ProjectRead.model_validate(await service.update_project(project_id, request))


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    description="Delete a project, its team links, its documents and their files.",
    responses={
        204: {"description": "Project deleted"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(project_id: int, service: ProjectServiceDep) -> None:
    await service.delete_project(project_id)
