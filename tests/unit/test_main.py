"""Unit tests for FastAPI application.

Tests for travel_journal/main.py - root, health and application setup.

Run with:
    pytest tests/unit/test_main.py -v -m fast
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio

from travel_journal.api.dependencies import get_store
from travel_journal.main import app


@pytest.mark.fast
class TestRootEndpoint:
    """Tests for root endpoint."""

    @pytest.mark.asyncio
    async def test_root_returns_info(self, test_client):
        """Test root endpoint returns application info."""
        response = await test_client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["name"] == "Travel Journal"
        assert "version" in data
        assert data["docs"] == "/docs"
        assert data["health"] == "/health"


@pytest.mark.fast
class TestHealthEndpoint:
    """Tests for health endpoint."""

    @pytest.mark.asyncio
    async def test_health_returns_status(self, test_client):
        """Test health endpoint returns status."""
        response = await test_client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] is True
        assert "version" in data
        assert data["environment"] == "development"

    @pytest.mark.asyncio
    async def test_health_reports_missing_storage(self, test_client):
        """Storage is unconfigured in the test environment but the app still serves."""
        response = await test_client.get("/health")

        assert response.json()["storage_configured"] is False


@pytest.mark.fast
class TestCORS:
    """Cross-origin access from the browser client."""

    @pytest.mark.asyncio
    async def test_preflight_allows_any_origin(self, test_client):
        response = await test_client.options(
            "/api/journals",
            headers={
                "Origin": "https://journal.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type,x-user-id",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "access-control-allow-credentials" not in response.headers


@pytest_asyncio.fixture
async def failing_client():
    """Client whose document store raises an unexpected error."""
    store = MagicMock()
    store.list_by_date = AsyncMock(side_effect=RuntimeError("postgresql://journal:hunter2@db/journal"))
    app.dependency_overrides[get_store] = lambda: store

    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.mark.fast
class TestUnexpectedErrors:
    """Unhandled exceptions become a generic 500."""

    @pytest.mark.asyncio
    async def test_500_hides_exception_text(self, failing_client):
        response = await failing_client.get("/api/journals")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "detail": None}
        assert "hunter2" not in response.text
