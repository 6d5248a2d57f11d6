"""Unit tests for the health, readiness, system status and root endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from recipe_generator.core.config.settings import LLMSettings
from recipe_generator.factory import create_app
from tests.factories.settings import SettingsFactory


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI


pytestmark = pytest.mark.unit


@pytest.fixture
def llm_app() -> FastAPI:
    """Application configured with the LLM enabled but no client yet."""
    return create_app(
        SettingsFactory.build(
            llm=LLMSettings(enabled=True, base_url="http://gpu-box:1234/v1", model="qwen2.5-7b")
        )
    )


@pytest.fixture
async def llm_client(llm_app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client for the LLM-enabled application."""
    async with AsyncClient(
        transport=ASGITransport(app=llm_app),
        base_url="http://test",
    ) as http_client:
        yield http_client


def _backend(*, healthy: bool) -> MagicMock:
    backend = MagicMock()
    backend.check_health = AsyncMock(return_value=healthy)
    backend.list_models = AsyncMock(return_value=["qwen2.5-7b", "llama-3.1-8b"])
    return backend


class TestHealth:
    """Tests for GET /health."""

    async def test_health(self, client: AsyncClient) -> None:
        """Should report healthy with version and environment."""
        response = await client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["environment"] == "test"
        assert "version" in data
        assert "timestamp" in data

    async def test_health_has_request_headers(self, client: AsyncClient) -> None:
        """Should carry the request ID and timing headers."""
        response = await client.get("/api/v1/health")

        assert response.headers["X-Request-ID"]
        assert "X-Process-Time" in response.headers


class TestReadiness:
    """Tests for GET /ready."""

    async def test_ready_when_llm_disabled(self, client: AsyncClient) -> None:
        """Should be ready when the LLM is disabled by configuration."""
        response = await client.get("/api/v1/ready")

        data = response.json()
        assert data["status"] == "ready"
        assert data["dependencies"] == {"llm": "disabled"}

    async def test_degraded_when_not_initialized(self, llm_client: AsyncClient) -> None:
        """Should be degraded when the LLM client failed to start."""
        response = await llm_client.get("/api/v1/ready")

        data = response.json()
        assert response.status_code == 200
        assert data["status"] == "degraded"
        assert data["dependencies"] == {"llm": "not_initialized"}

    async def test_ready_with_healthy_llm(self, llm_app: FastAPI, llm_client: AsyncClient) -> None:
        """Should be ready when the backend answers."""
        llm_app.state.llm_client = _backend(healthy=True)

        response = await llm_client.get("/api/v1/ready")

        data = response.json()
        assert data["status"] == "ready"
        assert data["dependencies"] == {"llm": "healthy"}

    async def test_degraded_with_unhealthy_llm(
        self, llm_app: FastAPI, llm_client: AsyncClient
    ) -> None:
        """Should be degraded when the backend does not answer."""
        llm_app.state.llm_client = _backend(healthy=False)

        response = await llm_client.get("/api/v1/ready")

        data = response.json()
        assert data["status"] == "degraded"
        assert data["dependencies"] == {"llm": "unhealthy"}


class TestSystemStatus:
    """Tests for GET /system/status."""

    async def test_disabled(self, client: AsyncClient) -> None:
        """Should report the backend as disabled."""
        response = await client.get("/api/v1/system/status")

        data = response.json()
        assert data["llm"] == "disabled"
        assert data["models"] is None

    async def test_connected(self, llm_app: FastAPI, llm_client: AsyncClient) -> None:
        """Should list served models when the backend is connected."""
        llm_app.state.llm_client = _backend(healthy=True)

        response = await llm_client.get("/api/v1/system/status")

        data = response.json()
        assert data["llm"] == "connected"
        assert data["llm_base_url"] == "http://gpu-box:1234/v1"
        assert data["default_model"] == "qwen2.5-7b"
        assert data["models"] == ["qwen2.5-7b", "llama-3.1-8b"]

    async def test_disconnected(self, llm_app: FastAPI, llm_client: AsyncClient) -> None:
        """Should report disconnected when the backend does not answer."""
        llm_app.state.llm_client = _backend(healthy=False)

        response = await llm_client.get("/api/v1/system/status")

        data = response.json()
        assert data["llm"] == "disconnected"
        assert data["models"] is None

    async def test_disconnected_without_client(self, llm_client: AsyncClient) -> None:
        """Should report disconnected when no client was created."""
        response = await llm_client.get("/api/v1/system/status")

        assert response.json()["llm"] == "disconnected"


class TestRoot:
    """Tests for GET /."""

    async def test_root(self, client: AsyncClient) -> None:
        """Should return basic service info."""
        response = await client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["service"]
        assert data["docs"] == "/docs"
