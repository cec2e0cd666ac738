"""
Pastebin Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── database_url: SQLite file URL inside the test's tmp_path
    ├── paste_store: Opened PasteStore on database_url
    ├── broken_store: PasteStore whose database directory does not exist
    ├── mock_store: AsyncMock standing in for PasteStore (service unit tests)
    ├── test_client: HTTPX AsyncClient bound to an app using paste_store
    └── broken_client: HTTPX AsyncClient bound to an app using broken_store
"""

import os
import tempfile
from unittest.mock import AsyncMock

# Override settings for testing BEFORE any application imports
# Prevents tests from touching ./pastebin.db in the working directory
_TEST_DIR = tempfile.mkdtemp(prefix="pastebin_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/default.db"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests
os.environ["PUBLIC_BASE_URL"] = ""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from pastebin.main import create_app
from pastebin.store import PasteStore


@pytest.fixture
def database_url(tmp_path):
    """A fresh file-backed SQLite database per test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'pastes.db'}"


@pytest_asyncio.fixture
async def paste_store(database_url):
    """
    Provides an opened PasteStore with an empty `pastes` table.

    Closed after the test so the engine's connections are released.
    """
    store = PasteStore(database_url)
    await store.open()
    yield store
    await store.close()


@pytest_asyncio.fixture
async def broken_store(tmp_path):
    """
    Provides a PasteStore that fails every operation.

    The database file lives in a directory that is never created, so SQLite
    cannot open it. open() is deliberately not called (it would create it).
    """
    store = PasteStore(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'pastes.db'}")
    yield store
    await store.close()


@pytest.fixture
def mock_store():
    """
    Provides a mock PasteStore for PasteService unit tests.

    Usage:
        mock_store.get_by_id.return_value = paste_row
        result = await PasteService(mock_store).get_paste("a1b2c3d4")
    """
    store = AsyncMock()
    store.insert = AsyncMock(return_value=None)
    store.get_by_id = AsyncMock(return_value=None)
    return store


@pytest_asyncio.fixture
async def test_client(paste_store):
    """
    Provides an async HTTP test client backed by a real SQLite store.

    ASGITransport does not run the lifespan; the store is opened by the
    paste_store fixture instead.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    app = create_app(store=paste_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def broken_client(broken_store):
    """Async HTTP test client whose store fails every database call."""
    app = create_app(store=broken_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
