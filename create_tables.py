"""
create_tables.py
----------------
One-shot script to create all database tables.

Usage:
    python create_tables.py
"""

import asyncio

from sqlalchemy.ext.asyncio import create_async_engine

from inventory_app.core.config import settings
from inventory_app.models import Base  # Imports all models so metadata is populated


async def create_all_tables() -> None:
    engine = create_async_engine(settings.DATABASE_URL, echo=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    print("All tables created: companies, users, workers, products, distributions")


if __name__ == "__main__":
    asyncio.run(create_all_tables())
