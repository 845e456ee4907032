"""
schemas/product.py
------------------
Pydantic models for catalog entries and stock entry.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from inventory_app.schemas.base import CamelModel, MoneyOut


class ProductCreate(CamelModel):
    """
    Stock entry. Creates the product, or adds to it when a product with the
    same name (case-insensitive) already exists in the company.
    """
    product_name: str = Field(..., min_length=1, max_length=255, examples=["Safety Helmet"])
    category: str = Field(default="", max_length=120)
    item_code: str = Field(default="", max_length=120)
    stock_type: str = Field(default="Regular", max_length=60)
    total_stock: int = Field(..., ge=0, description="Quantity received")
    dealer_price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    total_value: Optional[Decimal] = Field(
        default=None,
        ge=0,
        max_digits=12,
        decimal_places=2,
        description="Defaults to total_stock * dealer_price",
    )

    @field_validator("product_name", "category", "item_code", "stock_type")
    @classmethod
    def strip(cls, v: str) -> str:
        return v.strip()


class ProductBulkCreate(CamelModel):
    items: list[ProductCreate] = Field(..., min_length=1)


class ProductRead(CamelModel):
    id: str
    company_id: str
    product_name: str
    category: str
    item_code: str
    stock_type: str
    total_stock: int
    dealer_price: MoneyOut
    total_value: MoneyOut
    updated_at: datetime
