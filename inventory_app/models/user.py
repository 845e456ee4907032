"""
models/user.py
--------------
User ORM model with roles and company binding.

Role design:
  - 'Admin':   Full access, including user management.
  - 'Manager': Stock entry and distribution.
  - 'Worker':  Read-only reports and analytics, limited to own hand-outs.

user_id is the login handle and is unique within a company only; two
companies may both have a user called 'admin'.

The hashed_password column stores bcrypt hashes only.
"""

from enum import Enum as PyEnum

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inventory_app.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class UserRole(str, PyEnum):
    admin = "Admin"
    manager = "Manager"
    worker = "Worker"


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("company_id", "user_id", name="uq_users_company_user_id"),
    )

    company_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[str] = mapped_column(String(120), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.worker.value
    )

    # Relationships
    company: Mapped["Company"] = relationship("Company", back_populates="users")  # noqa: F821

    def __repr__(self) -> str:
        return f"<User id={self.id} user_id={self.user_id} role={self.role}>"
