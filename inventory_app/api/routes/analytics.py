"""
api/routes/analytics.py
-----------------------
Aggregates for the dashboard and analytics screens.

GET /dashboard  — Stock health and distribution headline numbers
GET /analytics  — Trend, product share, worker impact, total value
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.db.session import get_db
from inventory_app.dependencies import SessionContext, require_permission
from inventory_app.schemas.analytics import AnalyticsSummary, DashboardStats
from inventory_app.services import analytics_service
from inventory_app.services.ledger_service import DistributionFilters, LedgerService
from inventory_app.services.product_service import ProductService
from inventory_app.services.worker_service import WorkerService

router = APIRouter(tags=["Analytics"])


def _own_rows_only(ctx: SessionContext) -> DistributionFilters:
    return DistributionFilters(worker_name_exact=ctx.actor_name if ctx.is_worker else None)


@router.get("/dashboard", response_model=DashboardStats, summary="Dashboard numbers")
async def dashboard(
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[SessionContext, Depends(require_permission("analytics"))],
) -> DashboardStats:
    products = await ProductService.list_products(db, ctx.company_id)
    _, distributions = await LedgerService.list_distributions(
        db, ctx.company_id, _own_rows_only(ctx)
    )
    workers = await WorkerService.list_workers(db, ctx.company_id)
    stats = analytics_service.dashboard_stats(products, distributions, workers)
    return DashboardStats.model_validate(stats)


@router.get("/analytics", response_model=AnalyticsSummary, summary="Analytics summary")
async def analytics(
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[SessionContext, Depends(require_permission("analytics"))],
) -> AnalyticsSummary:
    _, distributions = await LedgerService.list_distributions(
        db, ctx.company_id, _own_rows_only(ctx)
    )
    return AnalyticsSummary.model_validate(analytics_service.analytics_summary(distributions))
