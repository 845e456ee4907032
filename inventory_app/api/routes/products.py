"""
api/routes/products.py
----------------------
Catalog and stock entry endpoints.

GET  /products        — Catalog of the caller's company (optional search)
GET  /products/{id}   — One product
POST /products        — Stock entry: create, or add to a same-named product
POST /products/bulk   — Stock entry for many lines in one transaction
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from inventory_app.db.session import get_db
from inventory_app.dependencies import SessionContext, require_permission
from inventory_app.schemas.product import ProductBulkCreate, ProductCreate, ProductRead
from inventory_app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])


@router.get(
    "",
    response_model=list[ProductRead],
    summary="List products for the current company",
)
async def list_products(
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[SessionContext, Depends(require_permission("catalog"))],
    search: Optional[str] = Query(None, description="Match name, category or item code"),
) -> list[ProductRead]:
    products = await ProductService.list_products(db, ctx.company_id, search)
    return [ProductRead.model_validate(p) for p in products]


@router.get(
    "/{product_id}",
    response_model=ProductRead,
    summary="Get one product",
)
async def get_product(
    product_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[SessionContext, Depends(require_permission("catalog"))],
) -> ProductRead:
    product = await ProductService.get_product(db, ctx.company_id, product_id)
    return ProductRead.model_validate(product)


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product or add stock to an existing one",
)
async def add_stock(
    body: ProductCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[SessionContext, Depends(require_permission("stock"))],
) -> ProductRead:
    """
    Products are matched by name, case-insensitively. A match has its
    totalStock and totalValue increased; otherwise a new product is created.
    """
    product = await ProductService.add_or_update_product(db, ctx.company_id, body)
    return ProductRead.model_validate(product)


@router.post(
    "/bulk",
    response_model=list[ProductRead],
    status_code=status.HTTP_201_CREATED,
    summary="Stock entry for many products at once",
)
async def bulk_add_stock(
    body: ProductBulkCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    ctx: Annotated[SessionContext, Depends(require_permission("stock"))],
) -> list[ProductRead]:
    products = await ProductService.bulk_add_products(db, ctx.company_id, body.items)
    return [ProductRead.model_validate(p) for p in products]
