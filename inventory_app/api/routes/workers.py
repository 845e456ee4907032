"""
api/routes/workers.py
---------------------
Distribution recipients.

GET  /workers  — Workers of the caller's company
POST /workers  — Register a worker (usually mid-session, before handing out)
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.db.session import get_db
from inventory_app.dependencies import SessionContext, require_permission
from inventory_app.schemas.worker import WorkerCreate, WorkerRead
from inventory_app.services.worker_service import WorkerService

router = APIRouter(prefix="/workers", tags=["Workers"])


@router.get("", response_model=list[WorkerRead], summary="List workers")
async def list_workers(
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[SessionContext, Depends(require_permission("workers"))],
    search: Optional[str] = Query(None, description="Match name or mobile"),
) -> list[WorkerRead]:
    workers = await WorkerService.list_workers(db, ctx.company_id, search)
    return [WorkerRead.model_validate(w) for w in workers]


@router.post(
    "",
    response_model=WorkerRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a worker",
)
async def create_worker(
    body: WorkerCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[SessionContext, Depends(require_permission("workers"))],
) -> WorkerRead:
    worker = await WorkerService.create_worker(db, ctx.company_id, body)
    return WorkerRead.model_validate(worker)
