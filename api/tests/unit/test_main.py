"""Tests for main FastAPI application."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from fastapi.testclient import TestClient
from contextlib import asynccontextmanager

from src.main import create_app, api_summary


class TestMainApp:
    """Test main FastAPI application."""

    @pytest.fixture
    def mock_db_manager(self):
        """Mock database manager."""
        with patch("src.main.db_manager") as mock:
            mock.initialize = AsyncMock()
            mock.close = AsyncMock()
            yield mock

    @pytest.fixture
    def mock_get_db_pool(self):
        """Mock get_db_pool function."""
        with patch("src.main.get_db_pool") as mock:
            mock_pool = MagicMock()
            mock_pool.get_size.return_value = 4
            mock_pool.get_idle_size.return_value = 3
            mock_conn = AsyncMock()
            mock_conn.fetchval = AsyncMock(return_value=1)

            @asynccontextmanager
            async def mock_acquire():
                yield mock_conn

            mock_pool.acquire = mock_acquire
            mock.return_value = mock_pool
            yield mock

    @pytest.fixture
    def app(self, mock_db_manager, mock_get_db_pool):
        """Create test app with mocked dependencies."""
        return create_app()

    @pytest.fixture
    def client(self, app):
        """Create test client."""
        return TestClient(app)

    def test_create_app(self, app):
        """Test app creation."""
        assert app.title == "CRM API"
        assert app.version == "1.0.0"
        assert app.docs_url == "/docs"
        assert app.openapi_url == "/openapi.json"

    def test_root_endpoint(self, client):
        """Test root endpoint."""
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Welcome to the CRM API"
        assert data["docs"] == "/api/docs"
        assert data["health"] == "/health"

    def test_api_docs_endpoint(self, client):
        response = client.get("/api/docs")

        assert response.status_code == 200
        data = response.json()
        assert data == api_summary()
        assert data["endpoints"]["tasks_today"] == "/api/tasks/today"
        assert set(data["pagination"]) == {"page", "per_page", "sort", "order", "filter[<column>]"}

    def test_liveness_check(self, client):
        """Test liveness endpoint."""
        response = client.get("/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive", "service": "CRM API"}

    def test_health_check_success(self, client):
        """Test health check endpoint when database is healthy."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"

    def test_ready_check_success(self, client):
        """Test readiness check endpoint when database is ready."""
        response = client.get("/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["pool_size"] == 4
        assert data["pool_idle"] == 3

    def test_health_check_database_failure(self, client, mock_get_db_pool):
        """Test health check when database fails."""
        mock_get_db_pool.side_effect = Exception("Database connection failed")

        response = client.get("/health")

        assert response.status_code == 503
        assert response.headers["content-type"] == "application/problem+json"
        data = response.json()
        assert data["title"] == "Service Unavailable"
        assert "Database connection failed" in data["detail"]

    def test_ready_check_database_failure(self, client, mock_get_db_pool):
        """Test readiness check when database fails."""
        mock_get_db_pool.side_effect = Exception("Database connection failed")

        response = client.get("/ready")

        assert response.status_code == 503
        assert response.json()["detail"] == "Service not ready"

    def test_cors_middleware(self, client):
        """Test CORS middleware is configured."""
        response = client.options("/api/tasks", headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "GET"
        })

        assert response.status_code in [200, 204]

    def test_openapi_lists_resources(self, client):
        response = client.get("/openapi.json")

        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/api/tasks" in paths
        assert "/api/tasks/{item_id}" in paths
        assert "/api/pipelines/{pipeline_id}/stages" in paths
        assert "/api/messages/support/list/{company_id}" in paths

    def test_unknown_route_is_problem_json(self, client):
        response = client.get("/api/unknown")

        assert response.status_code == 404
        assert response.headers["content-type"] == "application/problem+json"

    def test_middleware_configuration(self, app):
        """Test that the request middlewares are registered."""
        middleware_classes = [middleware.cls.__name__ for middleware in app.user_middleware]

        assert "BodyLimitMiddleware" in middleware_classes
        assert "RequestLoggingMiddleware" in middleware_classes
        assert "CORSMiddleware" in middleware_classes


class TestLifespan:
    """Test application lifespan events."""

    @pytest.mark.asyncio
    @patch("src.main.db_manager")
    @patch("src.main.get_db_pool")
    async def test_lifespan_startup_success(self, mock_get_db_pool, mock_db_manager):
        """Test successful startup."""
        mock_db_manager.initialize = AsyncMock()
        mock_db_manager.close = AsyncMock()

        mock_pool = MagicMock()
        mock_conn = AsyncMock()

        @asynccontextmanager
        async def mock_acquire():
            yield mock_conn

        mock_pool.acquire = mock_acquire
        mock_get_db_pool.return_value = mock_pool

        from src.main import lifespan
        app = create_app()

        async with lifespan(app):
            mock_db_manager.initialize.assert_called_once()
            mock_conn.execute.assert_awaited_once_with("SELECT 1")

        mock_db_manager.close.assert_called_once()

    @pytest.mark.asyncio
    @patch("src.main.db_manager")
    async def test_lifespan_startup_failure(self, mock_db_manager):
        """Test startup failure."""
        mock_db_manager.initialize = AsyncMock(side_effect=Exception("DB init failed"))

        from src.main import lifespan
        app = create_app()

        with pytest.raises(Exception, match="DB init failed"):
            async with lifespan(app):
                pass

    @pytest.mark.asyncio
    @patch("src.main.db_manager")
    @patch("src.main.get_db_pool")
    async def test_lifespan_shutdown_error(self, mock_get_db_pool, mock_db_manager):
        """Test shutdown error handling."""
        mock_db_manager.initialize = AsyncMock()
        mock_pool = MagicMock()
        mock_conn = AsyncMock()

        @asynccontextmanager
        async def mock_acquire():
            yield mock_conn

        mock_pool.acquire = mock_acquire
        mock_get_db_pool.return_value = mock_pool

        mock_db_manager.close = AsyncMock(side_effect=Exception("Shutdown error"))

        from src.main import lifespan
        app = create_app()

        # Should not raise exception, just log the error
        async with lifespan(app):
            pass
