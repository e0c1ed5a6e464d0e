"""Shared fixtures: an in-memory listing store and an HTTP client over the app.

Every test gets a fresh aiosqlite database on a single shared connection
(StaticPool), so rows committed through one session are visible to the next.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from company_directory import models  # noqa: F401
from company_directory.api.deps import get_directory
from company_directory.core.config import Settings
from company_directory.core.database import Base, get_db
from company_directory.main import app
from company_directory.models.job_listing import JobListing
from company_directory.repositories.listing_repository import ListingRepository
from company_directory.services.directory import build_directory

from tests.factories import make_listing

SITE_URL = "https://site.test"


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
def session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def add_listings(session_maker):
    """Insert listings and commit: `await add_listings(make_listing("Acme"), ...)`."""

    async def _add(*listings: JobListing) -> None:
        async with session_maker() as session:
            session.add_all(listings)
            await session.commit()

    return _add


@pytest.fixture
async def scenario_listings(add_listings):
    """Zeta Corp (2 open), Alpha Inc (1 open, 1 filled), 7 Eleven (1 open)."""
    await add_listings(
        make_listing("Zeta Corp", title="SRE"),
        make_listing("Zeta Corp", title="Frontend Engineer"),
        make_listing("Alpha Inc", title="Backend Engineer"),
        make_listing("Alpha Inc", title="Support Lead", filled=True),
        make_listing("7 Eleven", title="Store Systems Engineer"),
    )


@pytest.fixture
def repo():
    return ListingRepository(timeout=5.0)


@pytest.fixture
def directory_settings():
    return Settings(_env_file=None, site_url=SITE_URL, site_name="Job Board")


@pytest.fixture
def directory(directory_settings):
    return build_directory(directory_settings)


@pytest.fixture
async def client(session_maker, directory):
    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_directory] = lambda: directory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
