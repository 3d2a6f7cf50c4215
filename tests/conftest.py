"""
Pytest configuration and fixtures for Travel Journal tests.

Each test gets its own temporary SQLite database file, so store and API
tests never share state. Settings are pinned through the environment
before the application is imported.
"""
import os
import sys
from pathlib import Path
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["STORAGE_BACKEND"] = "azure"
os.environ["ADMIN_USERS"] = "admin"
os.environ["ENVIRONMENT"] = "development"
os.environ.pop("DEBUG", None)
os.environ.pop("BLOB_CONNECTION_STRING", None)

from travel_journal.api.dependencies import get_store, get_upload_service  # noqa: E402
from travel_journal.database import create_engine_for_url, create_tables  # noqa: E402
from travel_journal.main import app  # noqa: E402
from travel_journal.storage.config import StorageConfig  # noqa: E402
from travel_journal.storage.service import UploadService  # noqa: E402
from travel_journal.store.sql import SqlDocumentStore  # noqa: E402
from tests.utils.builders import make_mock_blob_backend  # noqa: E402


# ============================================
# Database Fixtures
# ============================================

@pytest_asyncio.fixture
async def session_factory(tmp_path: Path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Session factory bound to a fresh file-backed SQLite database.

    A file (not :memory:) is used so concurrent sessions get separate
    connections, as they would against a real server.
    """
    engine = create_engine_for_url(f"sqlite+aiosqlite:///{tmp_path / 'journal.db'}")
    await create_tables(engine)

    yield async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    await engine.dispose()


@pytest.fixture
def store(session_factory) -> SqlDocumentStore:
    """Document store over the temporary database."""
    return SqlDocumentStore(session_factory)


# ============================================
# API Fixtures
# ============================================

@pytest.fixture
def mock_blob_backend():
    """Blob backend recording calls instead of talking to Azure."""
    return make_mock_blob_backend()


@pytest.fixture
def upload_service(mock_blob_backend) -> UploadService:
    """Upload service wired to the mock backend."""
    return UploadService(
        config=StorageConfig(container="images", max_upload_bytes=1024 * 1024),
        backend_factory=lambda config: mock_blob_backend,
    )


@pytest_asyncio.fixture
async def test_client(store, upload_service) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async HTTP client against the app with test store and upload service."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_upload_service] = lambda: upload_service

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# ============================================
# Pytest Configuration
# ============================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "fast: Fast unit tests (no external services)"
    )
    config.addinivalue_line(
        "markers", "integration: API tests against an in-process app"
    )
