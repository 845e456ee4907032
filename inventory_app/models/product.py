"""
models/product.py
-----------------
Catalog entry, scoped to a company.

total_stock is changed only by stock entry (increment) and distribution
(decrement). The CHECK constraint keeps it non-negative at the database
level as well. Product names are unique per company regardless of case.
"""

from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from inventory_app.db.base import Base, Money, TimestampMixin, UUIDPrimaryKeyMixin


class Product(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("total_stock >= 0", name="ck_products_total_stock_non_negative"),
    )

    company_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(120), nullable=False, default="General")
    item_code: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    stock_type: Mapped[str] = mapped_column(String(60), nullable=False, default="Regular")

    total_stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    dealer_price: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))
    total_value: Mapped[Decimal] = mapped_column(Money, nullable=False, default=Decimal("0"))

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.product_name} stock={self.total_stock}>"


# One catalog entry per name within a company, whatever the letter case
Index(
    "uq_products_company_lower_name",
    Product.company_id,
    func.lower(Product.product_name),
    unique=True,
)
