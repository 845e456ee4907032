"""
services/distribution_service.py
--------------------------------
Stock adjustment: turn a worker's cart into stock decrements and ledger rows.

Two passes over the cart, in submitted order:

  1. Validate. Every product is loaded with SELECT ... FOR UPDATE and each
     line is checked against the stock still available after the earlier
     lines of the same cart. The first failing line raises and nothing is
     written.
  2. Commit. Decrement each product and append one Distribution per line.
     The decrement is a guarded relative UPDATE
     (total_stock = total_stock - n WHERE total_stock >= n), so stock that
     moved since validation can never be overdrawn or overwritten; a line
     that no longer fits raises InsufficientStockError and the caller's
     rollback discards the lines already applied.

Both passes run inside the caller's transaction (one request = one
session), and the row locks are held until that transaction ends, so a
concurrent cart for the same product waits instead of validating against
a stale snapshot. Rows are locked in id order so two carts touching the
same products cannot deadlock each other. SQLite ignores FOR UPDATE and
serialises writers on its own.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.exceptions import (
    InsufficientStockError,
    ProductNotFound,
    ValidationError,
)
from inventory_app.core.logging import get_logger
from inventory_app.db.base import MONEY_LIMIT, utcnow
from inventory_app.models.distribution import Distribution
from inventory_app.models.product import Product
from inventory_app.services.ledger_service import LedgerService
from inventory_app.services.product_service import ProductService
from inventory_app.services.worker_service import WorkerService

logger = get_logger(__name__)


@dataclass(frozen=True)
class LineRequest:
    product_id: str
    quantity: int
    price_per_unit: Optional[Decimal] = None


def _to_quantity(value) -> int:
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("quantity must be a positive integer", field="quantity")
    if value <= 0:
        raise ValidationError("quantity must be a positive integer", field="quantity")
    return value


def _to_price(value) -> Decimal:
    if value is None:
        return Decimal("0")
    price = Decimal(str(value))
    if price < 0:
        raise ValidationError("pricePerUnit cannot be negative", field="pricePerUnit")
    return price


def _normalise(items: Iterable) -> list[LineRequest]:
    lines = []
    for item in items:
        line = LineRequest(
            product_id=item.product_id,
            quantity=_to_quantity(item.quantity),
            price_per_unit=_to_price(getattr(item, "price_per_unit", None)),
        )
        if line.price_per_unit * line.quantity >= MONEY_LIMIT:
            raise ValidationError(
                "quantity * pricePerUnit is too large", field="pricePerUnit"
            )
        lines.append(line)
    if not lines:
        raise ValidationError("A distribution needs at least one line item", field="items")
    return lines


class DistributionService:

    @staticmethod
    async def _lock_products(
        db: AsyncSession, company_id: str, product_ids: set[str]
    ) -> dict[str, Product]:
        result = await db.execute(
            select(Product)
            .where(Product.company_id == company_id, Product.id.in_(product_ids))
            .order_by(Product.id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return {p.id: p for p in result.scalars().all()}

    @staticmethod
    def _validate(lines: Sequence[LineRequest], products: dict[str, Product]) -> None:
        remaining: dict[str, int] = {}
        for line in lines:
            product = products.get(line.product_id)
            if product is None:
                raise ProductNotFound(line.product_id)
            available = remaining.get(product.id, product.total_stock)
            if available < line.quantity:
                raise InsufficientStockError(
                    product_id=product.id,
                    product_name=product.product_name,
                    requested=line.quantity,
                    available=available,
                )
            remaining[product.id] = available - line.quantity

    @staticmethod
    async def distribute(
        db: AsyncSession,
        company_id: str,
        actor_name: str,
        worker_id: str,
        line_items: Iterable,
    ) -> list[Distribution]:
        """
        Hand a cart of products to one worker, all or nothing.

        Args:
            company_id:  Tenant scope; workers and products outside it are
                         treated as missing.
            actor_name:  Recorded as distributed_by on every row.
            worker_id:   Recipient.
            line_items:  Objects with product_id, quantity and optional
                         price_per_unit (defaults to 0).

        Returns:
            The created Distribution rows, in submitted order.

        Raises:
            ValidationError:        empty cart, non-positive quantity,
                                    negative price.
            WorkerNotFound:         unknown worker in this company.
            ProductNotFound:        first line whose product is unknown.
            InsufficientStockError: first line asking for more than is left.
        """
        lines = _normalise(line_items)
        worker = await WorkerService.get_worker(db, company_id, worker_id)
        products = await DistributionService._lock_products(
            db, company_id, {line.product_id for line in lines}
        )

        try:
            DistributionService._validate(lines, products)
        except (ProductNotFound, InsufficientStockError) as exc:
            logger.warning(
                "Distribution rejected",
                company_id=company_id,
                worker_id=worker.id,
                reason=exc.code,
                detail=exc.message,
            )
            raise

        now = utcnow()
        created = []
        for line in lines:
            product = products[line.product_id]
            if not await ProductService.adjust_stock(db, product, -line.quantity):
                logger.warning(
                    "Distribution rejected",
                    company_id=company_id,
                    worker_id=worker.id,
                    reason="insufficient_stock",
                    product_id=product.id,
                )
                raise InsufficientStockError(
                    product_id=product.id,
                    product_name=product.product_name,
                    requested=line.quantity,
                    available=product.total_stock,
                )

            record = Distribution(
                company_id=company_id,
                worker_id=worker.id,
                worker_name=worker.name,
                product_id=product.id,
                product_name=product.product_name,
                quantity=line.quantity,
                price_per_unit=line.price_per_unit,
                total_amount=line.price_per_unit * line.quantity,
                distributed_by=actor_name,
                distributed_at=now,
            )
            created.append(await LedgerService.append(db, record))

        logger.info(
            "Distribution committed",
            company_id=company_id,
            worker_id=worker.id,
            lines=len(created),
            quantity=sum(r.quantity for r in created),
            distributed_by=actor_name,
        )
        return created
