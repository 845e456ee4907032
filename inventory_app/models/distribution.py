"""
models/distribution.py
----------------------
Distribution ledger row: one product line handed to one worker.

The ledger is append-only. worker_name and product_name are snapshots taken
at write time and are not kept in sync with later renames; company_id is
denormalised for zero-JOIN tenant-scoped queries.

Mapper and session hooks at the bottom of this module reject any ORM
update or delete that targets a recorded distribution.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, event
from sqlalchemy.orm import Mapped, Session, mapped_column

from inventory_app.core.exceptions import LedgerImmutableError
from inventory_app.db.base import Base, Money, UUIDPrimaryKeyMixin, utcnow


class Distribution(Base, UUIDPrimaryKeyMixin):
    __tablename__ = "distributions"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_distributions_quantity_positive"),
    )

    company_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    worker_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("workers.id"), nullable=False, index=True
    )
    worker_name: Mapped[str] = mapped_column(String(255), nullable=False)
    product_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("products.id"), nullable=False, index=True
    )
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price_per_unit: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))
    total_amount: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))

    distributed_by: Mapped[str] = mapped_column(String(255), nullable=False)
    distributed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )

    def __repr__(self) -> str:
        return (
            f"<Distribution id={self.id} worker={self.worker_name} "
            f"product={self.product_name} qty={self.quantity}>"
        )


# ── Append-only guards ───────────────────────────────────────────────────────

@event.listens_for(Distribution, "before_update")
def _reject_update(mapper, connection, target: Distribution) -> None:
    raise LedgerImmutableError(
        "Distribution records are append-only and cannot be modified",
        distribution_id=target.id,
    )


@event.listens_for(Distribution, "before_delete")
def _reject_delete(mapper, connection, target: Distribution) -> None:
    raise LedgerImmutableError(
        "Distribution records are append-only and cannot be deleted",
        distribution_id=target.id,
    )


@event.listens_for(Session, "do_orm_execute")
def _reject_bulk_changes(orm_execute_state) -> None:
    if not (orm_execute_state.is_update or orm_execute_state.is_delete):
        return
    mapper = orm_execute_state.bind_mapper
    table = getattr(orm_execute_state.statement, "table", None)
    if (mapper is not None and mapper.class_ is Distribution) or table is Distribution.__table__:
        raise LedgerImmutableError(
            "Distribution records are append-only and cannot be modified"
        )
