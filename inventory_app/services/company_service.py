"""
services/company_service.py
---------------------------
Business logic for company (tenant) setup.

Service layer is responsible for:
  - Constructing queries
  - Enforcing business rules (e.g. unique names)
  - Returning domain objects (ORM models) to the route layer
  - Never returning HTTP responses (that's the route's job)
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.exceptions import CompanyNotFound, ConflictError
from inventory_app.core.logging import get_logger
from inventory_app.models.company import Company
from inventory_app.schemas.company import CompanyCreate

logger = get_logger(__name__)


class CompanyService:

    @staticmethod
    async def create_company(db: AsyncSession, data: CompanyCreate) -> Company:
        """
        Create a new company.
        Raises ConflictError if a company with the same name already exists.
        """
        company = Company(name=data.name)
        db.add(company)
        try:
            await db.flush()  # Trigger DB constraints before commit
            await db.refresh(company)
        except IntegrityError:
            await db.rollback()
            raise ConflictError(f"Company '{data.name}' already exists", name=data.name)
        logger.info("Company created", company_id=company.id, name=company.name)
        return company

    @staticmethod
    async def get_company(db: AsyncSession, company_id: str) -> Company:
        company = await CompanyService.get_company_by_id(db, company_id)
        if company is None:
            raise CompanyNotFound(company_id)
        return company

    @staticmethod
    async def get_company_by_id(db: AsyncSession, company_id: str) -> Company | None:
        result = await db.execute(select(Company).where(Company.id == company_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_company_by_name(db: AsyncSession, name: str) -> Company | None:
        result = await db.execute(select(Company).where(Company.name == name))
        return result.scalar_one_or_none()
