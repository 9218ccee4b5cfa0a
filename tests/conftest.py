"""Shared fixtures: an in-memory store and an HTTP client bound to the app."""

import os

# Must be set before rankings.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("AUTH0_DOMAIN", "")
os.environ.setdefault("SENTRY_DSN", "")
os.environ.setdefault("LOG_FORMAT", "console")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from rankings.db.base import Base
from rankings.db.session import get_db
from rankings.main import app
from rankings.models import Company


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
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


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
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()


@pytest.fixture
def make_company(session_factory):
    """Insert a company in its own committed transaction."""
    counter = {"n": 0}

    async def _make(**overrides) -> Company:
        counter["n"] += 1
        n = counter["n"]
        values = {
            "name": f"Company {n}",
            "slug": f"company-{n}",
            "category": "ai",
            "tags": [],
            "elo_rating": 1500,
        }
        values.update(overrides)
        async with session_factory() as session:
            company = Company(**values)
            session.add(company)
            await session.commit()
            return company

    return _make


@pytest.fixture
def fetch_company(session_factory):
    """Read a company's current row from a fresh session."""

    async def _fetch(company_id: int) -> Company:
        async with session_factory() as session:
            return await session.get(Company, company_id)

    return _fetch
