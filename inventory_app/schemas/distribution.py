"""
schemas/distribution.py
-----------------------
Pydantic models for handing stock out to workers and reading the ledger.

LineItem              → one (product, quantity, price) entry of a cart
DistributionCreate    → single-line submission (POST /distributions)
BatchDistributionCreate → whole cart for one worker (POST /distributions/batch)
"""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from inventory_app.schemas.base import CamelModel, MoneyOut


class LineItem(CamelModel):
    product_id: str
    quantity: int = Field(..., gt=0)
    price_per_unit: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)


class DistributionCreate(LineItem):
    worker_id: str


class BatchDistributionCreate(CamelModel):
    worker_id: str
    items: list[LineItem] = Field(..., min_length=1)


class DistributionRead(CamelModel):
    id: str
    company_id: str
    worker_id: str
    worker_name: str
    product_id: str
    product_name: str
    quantity: int
    price_per_unit: MoneyOut
    total_amount: MoneyOut
    distributed_by: str
    distributed_at: datetime


class BatchDistributionResult(CamelModel):
    count: int
    total_quantity: int
    total_amount: MoneyOut
    items: list[DistributionRead]


class DistributionListResponse(CamelModel):
    total: int
    items: list[DistributionRead]
