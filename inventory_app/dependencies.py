"""
dependencies.py
---------------
FastAPI dependency injection functions for authentication and authorisation.

Flow:
  1. HTTPBearer extracts the Bearer token from the Authorization header.
  2. decode_access_token validates and parses the JWT (no DB round-trip).
  3. get_current_user fetches the full User record from the DB, verifying the
     token's sub and company_id against persisted data.
  4. get_session_context wraps the user in an explicit per-request
     SessionContext that handlers receive instead of reading global state.
  5. require_permission(group) layers the static role table on top.

The company_id embedded in the JWT scopes every DB query.
"""

from dataclasses import dataclass
from typing import Annotated, Callable

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.exceptions import PermissionDeniedError, UnauthorizedError
from inventory_app.core.logging import bind_request_context, get_logger
from inventory_app.core.permissions import is_allowed
from inventory_app.core.security import decode_access_token
from inventory_app.db.session import get_db
from inventory_app.models.user import User, UserRole
from inventory_app.services.user_service import UserService

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class SessionContext:
    """Who is calling and which company they act for, for one request."""
    user: User
    company_id: str
    role: UserRole

    @property
    def actor_name(self) -> str:
        return self.user.name

    @property
    def is_worker(self) -> bool:
        return self.role == UserRole.worker


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Decode the JWT, then load and return the full User from the database.
    Raises 401 if the token is missing, invalid, or the user no longer exists.
    """
    if credentials is None:
        raise UnauthorizedError("No token provided")

    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError as exc:
        logger.warning("JWT decode failed", error=str(exc))
        raise UnauthorizedError("Invalid token")

    user_pk = payload.get("sub")
    company_id = payload.get("company_id")
    if not user_pk or not company_id:
        raise UnauthorizedError("Invalid token")

    # Always re-verify against DB so deleted users are rejected
    user = await UserService.get_user(db, company_id, user_pk)
    if user is None:
        logger.warning("User from valid JWT not found in DB", user_id=user_pk)
        raise UnauthorizedError("Invalid token")

    return user


async def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User | None:
    """Like get_current_user, but None when no token is sent at all."""
    if credentials is None:
        return None
    return await get_current_user(credentials, db)


async def get_session_context(
    current_user: Annotated[User, Depends(get_current_user)],
) -> SessionContext:
    bind_request_context(
        company_id=current_user.company_id,
        user=current_user.user_id,
        role=current_user.role,
    )
    return SessionContext(
        user=current_user,
        company_id=current_user.company_id,
        role=UserRole(current_user.role),
    )


def require_permission(group: str) -> Callable:
    """
    Dependency factory: resolves to the SessionContext when the caller's
    role may use the route group, raises 403 otherwise.
    """
    async def _checker(
        ctx: Annotated[SessionContext, Depends(get_session_context)],
    ) -> SessionContext:
        if not is_allowed(ctx.role.value, group):
            raise PermissionDeniedError(
                f"Role '{ctx.role.value}' may not access {group}",
                role=ctx.role.value,
            )
        return ctx

    return _checker
