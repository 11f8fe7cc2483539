"""Tests for health check endpoint."""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

import goodbooks.main


class TestHealthCheck:
    """Tests for /health endpoint."""

    @pytest.mark.asyncio
    async def test_health_with_database(self, client: AsyncClient, session_maker, monkeypatch):
        """Test a healthy response against the test database."""
        monkeypatch.setattr(goodbooks.main, "async_session_maker", session_maker)

        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["checks"]["database"] == {"status": "healthy"}
        assert data["version"] == goodbooks.__version__

    @pytest.mark.asyncio
    async def test_health_response_structure(self, client: AsyncClient, session_maker, monkeypatch):
        """Test health response has correct structure."""
        monkeypatch.setattr(goodbooks.main, "async_session_maker", session_maker)

        data = (await client.get("/health")).json()

        assert "status" in data
        assert "timestamp" in data
        assert "uptime_seconds" in data
        assert "version" in data
        assert "checks" in data

    @pytest.mark.asyncio
    async def test_health_degraded(self, client: AsyncClient, monkeypatch):
        """Test that a failing database reports degraded."""

        class BrokenSession:
            async def __aenter__(self):
                raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

            async def __aexit__(self, *exc):
                return False

        monkeypatch.setattr(goodbooks.main, "async_session_maker", BrokenSession)

        response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"
        assert response.json()["checks"]["database"] == {"status": "unhealthy"}
