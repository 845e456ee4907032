"""
api/routes/users.py
-------------------
Admin-only user listing within the caller's company.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.db.session import get_db
from inventory_app.dependencies import SessionContext, require_permission
from inventory_app.schemas.user import UserRead
from inventory_app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "",
    response_model=list[UserRead],
    summary="List all users in the caller's company (admin only)",
)
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[SessionContext, Depends(require_permission("users"))],
) -> list[UserRead]:
    users = await UserService.list_users_in_company(db, ctx.company_id)
    return [UserRead.model_validate(u) for u in users]
