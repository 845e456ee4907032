"""
services/worker_service.py
--------------------------
Distribution recipients. Workers are created on the fly during a
distribution session and looked up again in later sessions.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.exceptions import WorkerNotFound
from inventory_app.core.logging import get_logger
from inventory_app.models.worker import Worker
from inventory_app.schemas.worker import WorkerCreate

logger = get_logger(__name__)


class WorkerService:

    @staticmethod
    async def create_worker(db: AsyncSession, company_id: str, data: WorkerCreate) -> Worker:
        worker = Worker(
            company_id=company_id,
            name=data.name.strip(),
            gender=data.gender.value,
            mobile=data.mobile.strip(),
        )
        db.add(worker)
        await db.flush()
        await db.refresh(worker)
        logger.info("Worker created", worker_id=worker.id, company_id=company_id)
        return worker

    @staticmethod
    async def get_worker(db: AsyncSession, company_id: str, worker_id: str) -> Worker:
        result = await db.execute(
            select(Worker).where(Worker.id == worker_id, Worker.company_id == company_id)
        )
        worker = result.scalar_one_or_none()
        if worker is None:
            raise WorkerNotFound(worker_id)
        return worker

    @staticmethod
    async def list_workers(
        db: AsyncSession, company_id: str, search: str | None = None
    ) -> list[Worker]:
        query = select(Worker).where(Worker.company_id == company_id)
        if search:
            like = f"%{search.strip()}%"
            query = query.where(Worker.name.ilike(like) | Worker.mobile.ilike(like))
        result = await db.execute(query.order_by(Worker.name))
        return list(result.scalars().all())
