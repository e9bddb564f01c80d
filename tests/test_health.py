"""Integration tests for health check endpoints."""

from pathlib import Path

from httpx import ASGITransport, AsyncClient

from docqa import __version__
from docqa.api.app import create_app

from tests.conftest import make_chat_service, make_settings, openai_handler


class TestHealthEndpoint:
    """Tests for /health endpoint."""

    async def test_health_returns_status(self, client: AsyncClient) -> None:
        """Health endpoint returns healthy status."""
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_health_returns_version(self, client: AsyncClient) -> None:
        """Health endpoint returns application version."""
        response = await client.get("/health")
        assert response.json()["version"] == __version__

    async def test_health_returns_timestamp(self, client: AsyncClient) -> None:
        """Health endpoint returns ISO timestamp."""
        response = await client.get("/health")
        assert "T" in response.json()["timestamp"]

    async def test_health_has_cors_headers(self, client: AsyncClient) -> None:
        """CORS headers are on every response."""
        response = await client.get("/health")
        assert response.headers["Access-Control-Allow-Origin"] == "*"


class TestReadinessEndpoint:
    """Tests for /health/ready endpoint."""

    async def test_ready(self, client: AsyncClient) -> None:
        """Ready with a key and a store."""
        response = await client.get("/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["checks"] == {"api_key": "ok", "vector_store": "ok"}
        assert "timestamp" in data

    async def test_not_ready_without_store(self, tmp_path: Path) -> None:
        """Missing store is reported."""
        settings = make_settings(tmp_path / "absent.json", api_key=None)
        app = create_app(settings, make_chat_service(settings, openai_handler()))

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/health/ready")

        data = response.json()
        assert data["status"] == "not_ready"
        assert data["checks"] == {"api_key": "missing", "vector_store": "missing"}


class TestLivenessEndpoint:
    """Tests for /health/live endpoint."""

    async def test_liveness_returns_alive(self, client: AsyncClient) -> None:
        """Liveness endpoint returns alive status."""
        response = await client.get("/health/live")
        assert response.status_code == 200
        assert response.json() == {"status": "alive"}


class TestUnknownPath:
    """Tests for unrouted paths."""

    async def test_not_found_shape(self, client: AsyncClient) -> None:
        """404 uses the API error shape."""
        response = await client.get("/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}
