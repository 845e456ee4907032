"""
services/user_service.py
------------------------
Business logic for user registration, authentication, and listing.

All queries are scoped by company_id: login handles are only unique
inside a company, so a lookup without it would be ambiguous as well as
a data leak.
"""

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.exceptions import (
    CompanyNotFound,
    ConflictError,
    PermissionDeniedError,
    UnauthorizedError,
    ValidationError,
)
from inventory_app.core.logging import get_logger
from inventory_app.core.security import hash_password, verify_password
from inventory_app.models.user import User, UserRole
from inventory_app.schemas.user import UserRegister
from inventory_app.services.company_service import CompanyService

logger = get_logger(__name__)


class UserService:

    @staticmethod
    async def register_user(
        db: AsyncSession, data: UserRegister, registered_by: User | None = None
    ) -> User:
        """
        Create a user in an existing company with the requested role.

        A company with no users yet accepts one unauthenticated registration,
        which must be for an Admin. Once it has users, registered_by must be
        an Admin of that company.

        Raises:
            CompanyNotFound:       unknown company.
            ValidationError:       first user is not an Admin.
            UnauthorizedError:     company has users and no registered_by.
            PermissionDeniedError: registered_by is not an Admin of the company.
            ConflictError:         user_id already taken inside the company.
        """
        company = await CompanyService.get_company_by_id(db, data.company_id)
        if company is None:
            raise CompanyNotFound(data.company_id)

        if await UserService.count_users(db, company.id) == 0:
            if data.role != UserRole.admin:
                raise ValidationError(
                    "The first user of a company must be an Admin", field="role"
                )
        elif registered_by is None:
            raise UnauthorizedError(
                "Only an Admin of this company can register more users"
            )
        elif registered_by.company_id != company.id or registered_by.role != UserRole.admin.value:
            raise PermissionDeniedError(
                "Only an Admin of this company can register more users",
                role=registered_by.role,
            )

        user = User(
            company_id=company.id,
            name=data.name,
            user_id=data.user_id,
            hashed_password=hash_password(data.password),
            role=data.role.value,
        )
        db.add(user)
        try:
            await db.flush()
            await db.refresh(user)
        except IntegrityError:
            await db.rollback()
            raise ConflictError(
                f"User ID '{data.user_id}' is already registered in this company",
                user_id=data.user_id,
            )
        logger.info(
            "User registered",
            user_id=user.id,
            company_id=user.company_id,
            role=user.role,
        )
        return user

    @staticmethod
    async def authenticate(
        db: AsyncSession, company_id: str, user_id: str, password: str
    ) -> User | None:
        """
        Verify credentials and return the User if valid, else None.
        """
        result = await db.execute(
            select(User).where(User.company_id == company_id, User.user_id == user_id)
        )
        user = result.scalar_one_or_none()
        if user is None or not verify_password(password, user.hashed_password):
            logger.info("Login rejected", company_id=company_id, user_id=user_id)
            return None
        return user

    @staticmethod
    async def get_user(db: AsyncSession, company_id: str, user_pk: str) -> User | None:
        result = await db.execute(
            select(User).where(User.id == user_pk, User.company_id == company_id)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def count_users(db: AsyncSession, company_id: str) -> int:
        result = await db.execute(
            select(func.count()).select_from(User).where(User.company_id == company_id)
        )
        return result.scalar_one()

    @staticmethod
    async def list_users_in_company(db: AsyncSession, company_id: str) -> list[User]:
        """
        Return all users belonging to a given company.
        Used by admin-only endpoints.
        """
        result = await db.execute(
            select(User).where(User.company_id == company_id).order_by(User.created_at)
        )
        return list(result.scalars().all())
