"""
api/routes/distributions.py
---------------------------
Handing stock to workers, and the distribution ledger.

POST /distributions        — One line for one worker
POST /distributions/batch  — A whole cart for one worker, all or nothing
GET  /distributions        — Ledger for the caller's company, filtered

There is deliberately no PUT/PATCH/DELETE: the ledger is append-only.
"""

from decimal import Decimal
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.db.session import get_db
from inventory_app.dependencies import SessionContext, require_permission
from inventory_app.schemas.distribution import (
    BatchDistributionCreate,
    BatchDistributionResult,
    DistributionCreate,
    DistributionListResponse,
    DistributionRead,
)
from inventory_app.services.distribution_service import DistributionService
from inventory_app.services.ledger_service import (
    DistributionFilters,
    LedgerService,
    Period,
)

router = APIRouter(prefix="/distributions", tags=["Distributions"])


@router.post(
    "",
    response_model=DistributionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Distribute one product line to a worker",
)
async def distribute_one(
    body: DistributionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[SessionContext, Depends(require_permission("distribution"))],
) -> DistributionRead:
    records = await DistributionService.distribute(
        db,
        company_id=ctx.company_id,
        actor_name=ctx.actor_name,
        worker_id=body.worker_id,
        line_items=[body],
    )
    return DistributionRead.model_validate(records[0])


@router.post(
    "/batch",
    response_model=BatchDistributionResult,
    status_code=status.HTTP_201_CREATED,
    summary="Distribute a cart of products to a worker",
)
async def distribute_batch(
    body: BatchDistributionCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[SessionContext, Depends(require_permission("distribution"))],
) -> BatchDistributionResult:
    """
    If any line fails (unknown product or not enough stock), no stock is
    adjusted and no ledger rows are written. The error names the first
    failing product with the requested and available quantities.
    """
    records = await DistributionService.distribute(
        db,
        company_id=ctx.company_id,
        actor_name=ctx.actor_name,
        worker_id=body.worker_id,
        line_items=body.items,
    )
    return BatchDistributionResult(
        count=len(records),
        total_quantity=sum(r.quantity for r in records),
        total_amount=sum((r.total_amount for r in records), Decimal("0")),
        items=[DistributionRead.model_validate(r) for r in records],
    )


@router.get(
    "",
    response_model=DistributionListResponse,
    summary="List the distribution ledger for the current company",
)
async def list_distributions(
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[SessionContext, Depends(require_permission("reports"))],
    period: Period = Query(Period.all, description="all | today | week | month"),
    worker: Optional[str] = Query(None, description="Worker name contains"),
    product: Optional[str] = Query(None, description="Product name contains"),
    worker_id: Optional[str] = Query(None, alias="workerId"),
    product_id: Optional[str] = Query(None, alias="productId"),
    skip: int = Query(default=0, ge=0, description="Pagination offset"),
    limit: Optional[int] = Query(default=None, ge=1, le=1000, description="Results per page"),
) -> DistributionListResponse:
    """Newest first. Workers only see what was handed to them."""
    filters = DistributionFilters(
        period=period,
        worker=worker,
        product=product,
        worker_id=worker_id,
        product_id=product_id,
        worker_name_exact=ctx.actor_name if ctx.is_worker else None,
        skip=skip,
        limit=limit,
    )
    total, records = await LedgerService.list_distributions(db, ctx.company_id, filters)
    return DistributionListResponse(
        total=total,
        items=[DistributionRead.model_validate(r) for r in records],
    )
