"""
Catalog API — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (mock repository, in-memory
       database, API client).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_repository: AsyncMock standing in for ProductRepository
    ├── sample_product_data: Field values for one product
    ├── database: In-memory SQLite Database with tables created
    ├── db_session: Session on that database
    └── test_client: HTTPX AsyncClient wired to an app using `database`
"""

import os

# Override settings for testing BEFORE any catalog_api import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["AUTO_CREATE_TABLES"] = "false"

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from catalog_api.database import Database  # noqa: E402
from catalog_api.models.product import Product  # noqa: E402


def make_product(**overrides) -> Product:
    """Transient Product instance for unit tests (never added to a session)."""
    fields = {"id": 1, "name": "Pizza", "category": "Food", "price": 29.99}
    fields.update(overrides)
    return Product(**fields)


def make_database() -> Database:
    """
    In-memory SQLite shared by every session.

    StaticPool keeps a single connection alive; without it each new
    connection would see a fresh, empty in-memory database.
    """
    return Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
def mock_repository():
    """
    Provides a mock ProductRepository.

    Usage:
        mock_repository.find_unique.return_value = make_product()
        result = await product_service.get_product(mock_repository, 1)
    """
    repository = AsyncMock()
    repository.find_many = AsyncMock(return_value=[])
    repository.count = AsyncMock(return_value=0)
    repository.find_unique = AsyncMock(return_value=None)
    repository.create = AsyncMock()
    repository.update = AsyncMock()
    repository.delete = AsyncMock()
    return repository


@pytest.fixture
def sample_product_data():
    return {"name": "Pizza", "category": "Food", "price": "29.99"}


@pytest_asyncio.fixture
async def database():
    db = make_database()
    db.open()
    await db.create_all()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so the injected database is
    opened by the `database` fixture instead.
    """
    from catalog_api.main import create_app

    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
