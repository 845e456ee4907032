"""
api/routes/company.py
---------------------
Company endpoints.

POST /company/setup  — Public endpoint to onboard a new company.
GET  /company        — The caller's own company.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.db.session import get_db
from inventory_app.dependencies import SessionContext, require_permission
from inventory_app.schemas.company import CompanyCreate, CompanyRead
from inventory_app.services.company_service import CompanyService

router = APIRouter(prefix="/company", tags=["Company"])


@router.post(
    "/setup",
    response_model=CompanyRead,
    status_code=status.HTTP_201_CREATED,
    summary="Onboard a new company",
)
async def setup_company(
    body: CompanyCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CompanyRead:
    """
    Public endpoint, no authentication required.
    Company names are unique across the system; a duplicate returns 409.
    """
    company = await CompanyService.create_company(db, body)
    return CompanyRead.model_validate(company)


@router.get(
    "",
    response_model=CompanyRead,
    summary="Get the caller's company",
)
async def get_company(
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[SessionContext, Depends(require_permission("company"))],
) -> CompanyRead:
    company = await CompanyService.get_company(db, ctx.company_id)
    return CompanyRead.model_validate(company)
