"""Company management service."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.projectdesk.core.exceptions import EntityNotFoundError, ReferenceConflictError
from src.projectdesk.core.logging import get_logger
from src.projectdesk.models import Company
from src.projectdesk.repositories import CompanyRepository
from src.projectdesk.schemas.company import CompanyCreate, CompanyUpdate

logger = get_logger(__name__)


class CompanyService:
    """Service for company operations."""

    def __init__(self, company_repo: CompanyRepository, session: AsyncSession):
        self.company_repo = company_repo
        self.session = session

    async def list_companies(self) -> list[tuple[Company, int, int]]:
        """List companies with their customer and executor project counts."""
        return await self.company_repo.list_with_project_counts()

    async def get_company(self, company_id: int) -> Company:
        company = await self.company_repo.get_by_id(company_id)
        if company is None:
            raise EntityNotFoundError(f"Company {company_id} not found")
        return company

    async def create_company(self, data: CompanyCreate) -> Company:
        company = Company(name=data.name)
        self.company_repo.add(company)
        try:
            await self.session.commit()
            await self.session.refresh(company)
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Company created", company_id=company.id)
        return company

    async def update_company(self, company_id: int, data: CompanyUpdate) -> Company:
        company = await self.get_company(company_id)
        if data.name is not None:
            company.name = data.name
        try:
            await self.session.commit()
            await self.session.refresh(company)
        except Exception:
            await self.session.rollback()
            raise
        return company

    async def delete_company(self, company_id: int) -> None:
        """Delete a company.

        Raises:
            EntityNotFoundError: If the company does not exist.
            ReferenceConflictError: If a project still references the company.
        """
        company = await self.get_company(company_id)
        await self.company_repo.delete(company)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ReferenceConflictError(
                "Cannot delete company while projects reference it"
            ) from e
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Company deleted", company_id=company_id)
