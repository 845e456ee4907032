"""
services/ledger_service.py
--------------------------
Distribution ledger: append and list.

The public contract has no update or delete. Every list query includes
company_id, and callers with the Worker role only ever see rows handed
out to their own name.
"""

import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.logging import get_logger
from inventory_app.models.distribution import Distribution

logger = get_logger(__name__)


class Period(str, Enum):
    all = "all"
    today = "today"
    week = "week"
    month = "month"


@dataclass
class DistributionFilters:
    period: Period = Period.all
    worker: Optional[str] = None        # substring of worker name
    product: Optional[str] = None       # substring of product name
    worker_id: Optional[str] = None
    product_id: Optional[str] = None
    worker_name_exact: Optional[str] = None
    skip: int = 0
    limit: Optional[int] = None


def _one_month_before(moment: datetime) -> datetime:
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def period_start(period: Period, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Lower bound of a report period, or None for 'all'.
    today = since midnight UTC; week = 7 days before midnight;
    month = one calendar month before midnight.
    """
    if period == Period.all:
        return None
    now = now or datetime.now(timezone.utc)
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == Period.today:
        return midnight
    if period == Period.week:
        return midnight - timedelta(days=7)
    return _one_month_before(midnight)


class LedgerService:

    @staticmethod
    async def append(db: AsyncSession, record: Distribution) -> Distribution:
        db.add(record)
        await db.flush()
        return record

    @staticmethod
    def _filtered(company_id: str, filters: DistributionFilters):
        query = select(Distribution).where(Distribution.company_id == company_id)
        since = period_start(filters.period)
        if since is not None:
            query = query.where(Distribution.distributed_at >= since)
        if filters.worker:
            query = query.where(Distribution.worker_name.ilike(f"%{filters.worker.strip()}%"))
        if filters.product:
            query = query.where(Distribution.product_name.ilike(f"%{filters.product.strip()}%"))
        if filters.worker_id:
            query = query.where(Distribution.worker_id == filters.worker_id)
        if filters.product_id:
            query = query.where(Distribution.product_id == filters.product_id)
        if filters.worker_name_exact is not None:
            query = query.where(Distribution.worker_name == filters.worker_name_exact)
        return query

    @staticmethod
    async def list_distributions(
        db: AsyncSession,
        company_id: str,
        filters: Optional[DistributionFilters] = None,
    ) -> tuple[int, list[Distribution]]:
        """
        Filtered ledger, newest first.

        Returns:
            (total_count, page_of_records)
        """
        filters = filters or DistributionFilters()
        query = LedgerService._filtered(company_id, filters)

        count_result = await db.execute(
            select(func.count()).select_from(query.subquery())
        )
        total = count_result.scalar_one()

        query = query.order_by(Distribution.distributed_at.desc()).offset(filters.skip)
        if filters.limit is not None:
            query = query.limit(filters.limit)
        result = await db.execute(query)
        return total, list(result.scalars().all())
