"""
models/company.py
-----------------
Company (tenant) ORM model.

Each company is an isolated organisational unit. All data belonging to a
company is scoped by company_id at the query level; always include
company_id in WHERE clauses.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inventory_app.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Company(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)

    # Relationships
    users: Mapped[list["User"]] = relationship(  # noqa: F821
        "User", back_populates="company", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Company id={self.id} name={self.name}>"
