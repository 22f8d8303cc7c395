"""Company endpoints."""

from fastapi import APIRouter, status

from src.projectdesk.api.dependencies import CompanyServiceDep
from src.projectdesk.schemas.company import (
    CompanyCreate,
    CompanyListRead,
    CompanyRead,
    CompanyUpdate,
)

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get(
    "",
    response_model=list[CompanyListRead],
    summary="List companies",
    description=(
        "List all companies ordered by name, with the number of projects in which "
        "each is the customer and the executor."
    ),
)
async def list_companies(service: CompanyServiceDep) -> list[CompanyListRead]:
    return [
        CompanyListRead.model_validate(company).model_copy(
            update={
                "projects_as_customer_count": as_customer,
                "projects_as_executor_count": as_executor,
            }
        )
        for company, as_customer, as_executor in await service.list_companies()
    ]


@router.get(
    "/{company_id}",
    response_model=CompanyRead,
    summary="Get company",
    responses={
        200: {"description": "Company details"},
        404: {"description": "Company not found"},
    },
)
async def get_company(company_id: int, service: CompanyServiceDep) -> CompanyRead:
    return CompanyRead.model_validate(await service.get_company(company_id))


@router.post(
    "",
    response_model=CompanyRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create company",
)
async def create_company(request: CompanyCreate, service: CompanyServiceDep) -> CompanyRead:
    return CompanyRead.model_validate(await service.create_company(request))


@router.patch(
    "/{company_id}",
    response_model=CompanyRead,
    summary="Update company",
    responses={
        200: {"description": "Company updated"},
        404: {"description": "Company not found"},
    },
)
async def update_company(
    company_id: int,
    request: CompanyUpdate,
    service: CompanyServiceDep,
) -> CompanyRead:
    return CompanyRead.model_validate(await service.update_company(company_id, request))


@router.delete(
    "/{company_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete company",
    description="Delete a company. Fails while any project references it.",
    responses={
        204: {"description": "Company deleted"},
        404: {"description": "Company not found"},
        409: {"description": "Company is referenced by a project"},
    },
)
async def delete_company(company_id: int, service: CompanyServiceDep) -> None:
    await service.delete_company(company_id)
