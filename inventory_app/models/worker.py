"""
models/worker.py
----------------
Distribution recipient. Not a login; created ad hoc while handing out stock
and reused across sessions.
"""

from enum import Enum as PyEnum

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from inventory_app.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Gender(str, PyEnum):
    male = "Male"
    female = "Female"
    other = "Other"


class Worker(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "workers"

    company_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    gender: Mapped[str] = mapped_column(String(10), nullable=False, default=Gender.male.value)
    mobile: Mapped[str] = mapped_column(String(32), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Worker id={self.id} name={self.name}>"
