"""
services/analytics_service.py
-----------------------------
Dashboard and analytics aggregates over the catalog and the ledger.

These are plain functions over already-fetched rows: sums, group-bys and
top-N lists, no extra queries. The route layer loads the rows (tenant
scoped, and limited to the caller's own hand-outs for the Worker role)
and passes them in.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Sequence

from inventory_app.core.config import settings
from inventory_app.models.distribution import Distribution
from inventory_app.models.product import Product
from inventory_app.models.worker import Worker


def _top_by_quantity(rows: Iterable[Distribution], key: str, limit: int) -> list[dict]:
    totals: dict[str, int] = defaultdict(int)
    for row in rows:
        totals[getattr(row, key)] += row.quantity
    ranked = sorted(totals.items(), key=lambda kv: (-kv[1], kv[0]))
    return [{"name": name, "value": value} for name, value in ranked[:limit]]


def _top_by_count(rows: Iterable[Distribution], key: str, limit: int) -> list[dict]:
    counts: dict[str, int] = defaultdict(int)
    for row in rows:
        counts[getattr(row, key)] += 1
    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    return [{"name": name, "value": value} for name, value in ranked[:limit]]


def _quantity_by_date(rows: Iterable[Distribution]) -> list[dict]:
    totals: dict[str, int] = defaultdict(int)
    for row in rows:
        totals[row.distributed_at.date().isoformat()] += row.quantity
    return [{"date": day, "quantity": qty} for day, qty in sorted(totals.items())]


def dashboard_stats(
    products: Sequence[Product],
    distributions: Sequence[Distribution],
    workers: Sequence[Worker],
    low_stock_threshold: int | None = None,
) -> dict:
    """
    Headline numbers for the dashboard.

    total_distributed is the number of units handed out and
    distribution_count the number of ledger rows. worker_stats ranks workers
    by how many rows they received. These, top_products and timeline are
    computed from the distributions passed in; pass only the caller's own
    rows for workers.
    """
    threshold = settings.LOW_STOCK_THRESHOLD if low_stock_threshold is None else low_stock_threshold
    out_of_stock = [p for p in products if p.total_stock == 0]
    low_stock = [p for p in products if 0 < p.total_stock <= threshold]

    return {
        "total_products": len(products),
        "total_inventory": sum(p.total_stock for p in products),
        "out_of_stock": len(out_of_stock),
        "low_stock": len(low_stock),
        "total_distributed": sum(d.quantity for d in distributions),
        "distribution_count": len(distributions),
        "total_workers": len(workers),
        "top_products": _top_by_quantity(distributions, "product_name", 5),
        "worker_stats": _top_by_count(distributions, "worker_name", 5),
        "timeline": _quantity_by_date(distributions)[-7:],
        "out_of_stock_list": out_of_stock,
        "low_stock_list": low_stock,
    }


def analytics_summary(distributions: Sequence[Distribution]) -> dict:
    """Trend over the last 14 active days, product share, worker impact, value."""
    return {
        "trend": _quantity_by_date(distributions)[-14:],
        "product_share": _top_by_quantity(distributions, "product_name", 6),
        "worker_impact": _top_by_quantity(distributions, "worker_name", 8),
        "total_value": sum((d.total_amount or Decimal("0") for d in distributions), Decimal("0")),
    }
