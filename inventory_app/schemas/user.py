"""
schemas/user.py
---------------
Pydantic models for User registration, login, and responses.

hashed_password is never included in any response schema.
"""

from datetime import datetime

from pydantic import Field, field_validator

from inventory_app.models.user import UserRole
from inventory_app.schemas.base import CamelModel


class UserRegister(CamelModel):
    """Registration into an existing company; company_id comes from the body."""
    company_id: str = Field(..., description="UUID of the company to join")
    name: str = Field(..., min_length=1, max_length=255)
    user_id: str = Field(..., min_length=1, max_length=120, description="Login handle")
    password: str = Field(..., min_length=6, max_length=128)
    role: UserRole = UserRole.worker

    @field_validator("name", "user_id")
    @classmethod
    def strip(cls, v: str) -> str:
        return v.strip()


class UserRead(CamelModel):
    id: str
    company_id: str
    name: str
    user_id: str
    role: str
    created_at: datetime


class LoginRequest(CamelModel):
    company_id: str
    user_id: str
    password: str


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user: UserRead
