"""
services/product_service.py
---------------------------
Catalog store: product lookup, persistence, and stock entry.

Stock entry never creates duplicates by name. A product whose name matches
an existing one (trimmed, case-insensitive) adds to that product's stock
and value instead; a unique index on (company_id, lower(product_name))
backs this up when two entries for a new name race each other.

Stock counts are only ever changed with a relative UPDATE
(total_stock = total_stock + n), never by writing back a value read
earlier, so a stock entry and a distribution running at the same time
both land.
"""

from decimal import Decimal
from typing import Iterable

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.core.exceptions import ConflictError, ProductNotFound, ValidationError
from inventory_app.core.logging import get_logger
from inventory_app.db.base import MONEY_LIMIT
from inventory_app.models.product import Product
from inventory_app.schemas.product import ProductCreate

logger = get_logger(__name__)


def _incoming_value(data: ProductCreate) -> Decimal:
    if data.total_value is not None and data.total_value > 0:
        value = data.total_value
    else:
        value = data.dealer_price * data.total_stock
    if value >= MONEY_LIMIT:
        raise ValidationError("Stock value is too large", field="totalValue")
    return value


class ProductService:

    @staticmethod
    async def get_product(db: AsyncSession, company_id: str, product_id: str) -> Product:
        """Raises ProductNotFound when the id is unknown in this company."""
        result = await db.execute(
            select(Product).where(Product.id == product_id, Product.company_id == company_id)
        )
        product = result.scalar_one_or_none()
        if product is None:
            raise ProductNotFound(product_id)
        return product

    @staticmethod
    async def save_product(db: AsyncSession, product: Product) -> Product:
        db.add(product)
        await db.flush()
        return product

    @staticmethod
    async def adjust_stock(
        db: AsyncSession,
        product: Product,
        quantity: int,
        value: Decimal = Decimal("0"),
    ) -> bool:
        """
        Add quantity (negative to take stock out) and value to the product
        in one UPDATE against the current row, then reload it.

        A decrement larger than the stock on hand matches no row and changes
        nothing. Returns False in that case.

        Unflushed attribute changes on product are discarded by the reload;
        flush them first.
        """
        stmt = update(Product).where(
            Product.id == product.id, Product.company_id == product.company_id
        )
        if quantity < 0:
            stmt = stmt.where(Product.total_stock >= -quantity)
        result = await db.execute(
            stmt.values(
                total_stock=Product.total_stock + quantity,
                total_value=Product.total_value + value,
            ).execution_options(synchronize_session=False)
        )
        await db.refresh(product)
        return result.rowcount == 1

    @staticmethod
    async def find_by_name(db: AsyncSession, company_id: str, name: str) -> Product | None:
        result = await db.execute(
            select(Product).where(
                Product.company_id == company_id,
                func.lower(Product.product_name) == name.strip().lower(),
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def list_products(
        db: AsyncSession, company_id: str, search: str | None = None
    ) -> list[Product]:
        query = select(Product).where(Product.company_id == company_id)
        if search:
            like = f"%{search.strip()}%"
            query = query.where(
                Product.product_name.ilike(like)
                | Product.category.ilike(like)
                | Product.item_code.ilike(like)
            )
        result = await db.execute(query.order_by(Product.product_name))
        return list(result.scalars().all())

    @staticmethod
    async def add_or_update_product(
        db: AsyncSession, company_id: str, data: ProductCreate
    ) -> Product:
        """
        Record incoming stock.

        Existing product (same name): total_stock and total_value grow by the
        incoming amounts; category and dealer_price are replaced only when
        new non-empty values are given.
        New product: created with the given values, total_value defaulting to
        total_stock * dealer_price.

        Raises ConflictError when another request created a product with the
        same name between the lookup and the insert; retrying merges into it.
        """
        value = _incoming_value(data)
        product = await ProductService.find_by_name(db, company_id, data.product_name)

        if product is not None:
            if product.total_value + value >= MONEY_LIMIT:
                raise ValidationError("Stock value is too large", field="totalValue")
            await ProductService.adjust_stock(db, product, data.total_stock, value)
            if data.category:
                product.category = data.category
            if data.dealer_price > 0:
                product.dealer_price = data.dealer_price
            if data.item_code and not product.item_code:
                product.item_code = data.item_code
            await ProductService.save_product(db, product)
            logger.info(
                "Stock added to product",
                product_id=product.id,
                company_id=company_id,
                added=data.total_stock,
                total_stock=product.total_stock,
            )
            return product

        product = Product(
            company_id=company_id,
            product_name=data.product_name,
            category=data.category or "General",
            item_code=data.item_code,
            stock_type=data.stock_type or "Regular",
            total_stock=data.total_stock,
            dealer_price=data.dealer_price,
            total_value=value,
        )
        try:
            await ProductService.save_product(db, product)
        except IntegrityError:
            await db.rollback()
            raise ConflictError(
                f"Product '{data.product_name}' was created by another request, "
                "submit the entry again to add to it",
                product_name=data.product_name,
            )
        await db.refresh(product)
        logger.info(
            "Product created",
            product_id=product.id,
            company_id=company_id,
            total_stock=product.total_stock,
        )
        return product

    @staticmethod
    async def bulk_add_products(
        db: AsyncSession, company_id: str, items: Iterable[ProductCreate]
    ) -> list[Product]:
        """Apply add_or_update_product to every item, in order, in one transaction."""
        products = []
        for item in items:
            products.append(await ProductService.add_or_update_product(db, company_id, item))
        logger.info("Bulk stock entry", company_id=company_id, lines=len(products))
        return products
