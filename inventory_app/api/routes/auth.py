"""
api/routes/auth.py
------------------
Authentication endpoints.

POST /auth/register  — Register a user into an existing company
                      (open for its first Admin, Admin-only afterwards).
POST /auth/login     — Exchange (companyId, userId, password) for a JWT.
GET  /auth/me        — Return the authenticated user's profile.
"""

from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.config import settings
from inventory_app.core.exceptions import UnauthorizedError
from inventory_app.core.security import create_access_token
from inventory_app.db.session import get_db
from inventory_app.dependencies import get_current_user, get_optional_user
from inventory_app.models.user import User
from inventory_app.schemas.user import (
    LoginRequest,
    TokenResponse,
    UserRead,
    UserRegister,
)
from inventory_app.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
)
async def register(
    body: UserRegister,
    db: Annotated[AsyncSession, Depends(get_db)],
    registered_by: Annotated[User | None, Depends(get_optional_user)],
) -> UserRead:
    """
    Create a new user inside an existing company.

    The first user of a company registers without a token and must be an
    Admin. After that only an Admin of the same company may register users,
    with any role.
    The companyId must correspond to an existing company (404 otherwise),
    and the userId must be free within that company (409 otherwise).
    """
    user = await UserService.register_user(db, body, registered_by=registered_by)
    return UserRead.model_validate(user)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login and receive a JWT access token",
)
async def login(
    body: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    user = await UserService.authenticate(db, body.company_id, body.user_id, body.password)
    if user is None:
        raise UnauthorizedError("Invalid user ID or password")

    expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    token = create_access_token(
        subject=user.id,
        company_id=user.company_id,
        role=user.role,
        name=user.name,
        expires_delta=expires,
    )

    return TokenResponse(
        access_token=token,
        token_type="bearer",
        expires_in=int(expires.total_seconds()),
        user=UserRead.model_validate(user),
    )


@router.get(
    "/me",
    response_model=UserRead,
    summary="Get the currently authenticated user",
)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserRead:
    return UserRead.model_validate(current_user)
