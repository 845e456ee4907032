"""
schemas/analytics.py
--------------------
Response models for the dashboard and analytics aggregates.
"""

from pydantic import Field

from inventory_app.schemas.base import CamelModel, MoneyOut
from inventory_app.schemas.product import ProductRead


class NamedQuantity(CamelModel):
    name: str
    value: int


class DateQuantity(CamelModel):
    date: str
    quantity: int


class DashboardStats(CamelModel):
    total_products: int
    total_inventory: int
    out_of_stock: int
    low_stock: int
    total_distributed: int
    distribution_count: int
    total_workers: int
    top_products: list[NamedQuantity]
    worker_stats: list[NamedQuantity]
    timeline: list[DateQuantity]
    out_of_stock_list: list[ProductRead] = Field(default_factory=list)
    low_stock_list: list[ProductRead] = Field(default_factory=list)


class AnalyticsSummary(CamelModel):
    trend: list[DateQuantity]
    product_share: list[NamedQuantity]
    worker_impact: list[NamedQuantity]
    total_value: MoneyOut
