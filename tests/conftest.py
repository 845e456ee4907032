"""
Shared fixtures.

Settings are read at import time, so the environment is prepared before
anything from inventory_app is imported. Every test gets a fresh in-memory
SQLite database; the API client runs the real app with get_db pointed at it.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from decimal import Decimal  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from inventory_app.db.session import get_db  # noqa: E402
from inventory_app.models import Base, Company, Product, Worker  # noqa: E402
from main import app  # noqa: E402


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def file_engine(tmp_path):
    """On-disk database with a real connection per session, for interleaved sessions."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'inventory.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def file_sessions(file_engine):
    return async_sessionmaker(
        bind=file_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ── Service-level data ───────────────────────────────────────────────────────

@pytest.fixture
async def company(db):
    company = Company(id="c1", name="Acme Distribution")
    db.add(company)
    await db.flush()
    return company


@pytest.fixture
async def worker(db, company):
    worker = Worker(id="w1", company_id=company.id, name="Ravi Kumar", gender="Male", mobile="9000000001")
    db.add(worker)
    await db.flush()
    return worker


@pytest.fixture
def make_product(db, company):
    async def _make(product_id: str, stock: int, name: str | None = None, company_id: str | None = None):
        product = Product(
            id=product_id,
            company_id=company_id or company.id,
            product_name=name or f"Product {product_id}",
            category="General",
            total_stock=stock,
            dealer_price=Decimal("10"),
            total_value=Decimal("10") * stock,
        )
        db.add(product)
        await db.flush()
        return product

    return _make


# ── API helpers ──────────────────────────────────────────────────────────────

async def setup_company(client, name="Acme Distribution") -> str:
    resp = await client.post("/company/setup", json={"name": name})
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


async def register_and_login(
    client, company_id, user_id="admin", role="Admin", name="Asha Admin", headers=None
):
    """Register (as the company's first Admin unless headers are given) and log in."""
    resp = await client.post(
        "/auth/register",
        headers=headers,
        json={
            "companyId": company_id,
            "name": name,
            "userId": user_id,
            "password": "secret123",
            "role": role,
        },
    )
    assert resp.status_code == 201, resp.text
    resp = await client.post(
        "/auth/login",
        json={"companyId": company_id, "userId": user_id, "password": "secret123"},
    )
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['accessToken']}"}


@pytest.fixture
async def admin_headers(client):
    company_id = await setup_company(client)
    return await register_and_login(client, company_id)
