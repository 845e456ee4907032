"""
db/base.py
----------
Declarative base and shared mixins.

TimestampMixin:      Adds created_at / updated_at columns to any model.
UUIDPrimaryKeyMixin: 36-char UUID string primary key. UUIDs prevent tenant
                     enumeration and work the same on PostgreSQL and SQLite.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Money columns: 12 digits, 2 decimal places
Money = Numeric(12, 2)

# Smallest amount that no longer fits a Money column
MONEY_LIMIT = Decimal("1e10")


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UUIDPrimaryKeyMixin:
    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )


class TimestampMixin:
    """Adds created_at and updated_at timestamps, set in Python and on the server."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )
