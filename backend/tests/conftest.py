"""
EMS Backend — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Every test gets its own in-memory store, so tests never see each
       other's rows and ids always start at 1.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    store
    ├── db_session:  AsyncSession bound to the store (service-level tests)
    └── test_client: HTTPX AsyncClient for an app that owns the store
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from ems.database import Store


@pytest_asyncio.fixture
async def store():
    """
    Provides a fresh in-memory store with the schema created.

    Each Store owns its own StaticPool connection, so each test gets a
    separate SQLite memory database.
    """
    test_store = Store("sqlite+aiosqlite:///:memory:")
    await test_store.create_schema()
    yield test_store
    await test_store.dispose()


@pytest_asyncio.fixture
async def db_session(store):
    """
    Provides an AsyncSession on the test store.

    Usage:
        async def test_get_employee(db_session):
            created = await employee_service.create_employee(db_session, payload)
    """
    async with store.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(store):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, which is why the store fixture
    creates the schema itself.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from ems.main import create_app

    app = create_app(store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def store_failure():
    """An engine-level error, as raised by a broken or unavailable store."""
    return OperationalError("SELECT", {}, Exception("disk I/O error"))
