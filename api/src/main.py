"""Main FastAPI application for the CRM API."""

import logging
from contextlib import asynccontextmanager
from typing import Dict, Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .db.connection import db_manager, get_db_pool
from .errors import register_exception_handlers
from .errors.problem_details import ServiceUnavailableError
from .middleware import BodyLimitMiddleware, RequestLoggingMiddleware
from .pagination import DEFAULT_PAGE, DEFAULT_PER_PAGE, MAX_PER_PAGE, DEFAULT_SORT, DEFAULT_ORDER
from .routes import ROUTERS

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format=get_settings().log_format
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_PREFIX = "/api"

# Paths that are not worth a log line per request
QUIET_PATHS = ["/health", "/ready", "/live"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting {settings.app_name}")

    # Configure logging level from settings
    logging.getLogger().setLevel(getattr(logging, settings.log_level))

    try:
        # Initialize database connection
        await db_manager.initialize()
        logger.info("Database connection pool initialized")

        # Verify database connectivity
        pool = await get_db_pool()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
        logger.info("Database connectivity verified")

    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")
    try:
        await db_manager.close()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")


def api_summary() -> Dict[str, Any]:
    """Describe the API's endpoints and the list query parameters."""
    return {
        "version": API_VERSION,
        "endpoints": {
            "pipelines": f"{API_PREFIX}/pipelines",
            "pipeline_stages": f"{API_PREFIX}/pipelines/{{id}}/stages",
            "stages": f"{API_PREFIX}/stages",
            "stages_with_contacts": f"{API_PREFIX}/stages/with-contacts",
            "stage_contacts": f"{API_PREFIX}/stages/{{id}}/contacts",
            "tags": f"{API_PREFIX}/tags",
            "contacts": f"{API_PREFIX}/contacts",
            "messages": {
                "private": f"{API_PREFIX}/messages/private",
                "group": f"{API_PREFIX}/messages/group",
                "support": f"{API_PREFIX}/messages/support",
                "support_list": f"{API_PREFIX}/messages/support/list/{{company_id}}"
            },
            "tasks": f"{API_PREFIX}/tasks",
            "tasks_today": f"{API_PREFIX}/tasks/today",
            "tasks_completed": f"{API_PREFIX}/tasks/completed",
            "tasks_pending": f"{API_PREFIX}/tasks/pending",
            "goals": f"{API_PREFIX}/goals",
            "projects": f"{API_PREFIX}/projects"
        },
        "pagination": {
            "page": f"Page number, starting at {DEFAULT_PAGE}",
            "per_page": f"Items per page, default {DEFAULT_PER_PAGE}, maximum {MAX_PER_PAGE}",
            "sort": f"Column to sort by, default {DEFAULT_SORT}",
            "order": f"asc or desc, default {DEFAULT_ORDER}",
            "filter[<column>]": "Substring match on a column, e.g. filter[status]=open"
        }
    }


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="CRUD API for pipelines, contacts, messages, tasks, goals and projects",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    # Reject oversized bodies before anything reads them
    app.add_middleware(BodyLimitMiddleware, max_bytes=settings.body_limit)

    app.add_middleware(RequestLoggingMiddleware, skip_paths=QUIET_PATHS)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Register exception handlers
    register_exception_handlers(app)

    # Register API routes
    for router in ROUTERS:
        app.include_router(router, prefix=API_PREFIX)

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check() -> Dict[str, Any]:
        """Health check endpoint with database connectivity test."""
        try:
            # Test database connectivity
            pool = await get_db_pool()
            async with pool.acquire() as conn:
                await conn.execute("SELECT 1")

            return {
                "status": "healthy",
                "service": settings.app_name,
                "version": API_VERSION,
                "database": "connected"
            }
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            raise ServiceUnavailableError(
                detail="Database connection failed",
                database_error=str(e)
            )

    # Ready check endpoint (Kubernetes style)
    @app.get("/ready", tags=["Health"])
    async def ready_check() -> Dict[str, Any]:
        """Readiness check endpoint."""
        try:
            pool = await get_db_pool()
            async with pool.acquire() as conn:
                await conn.fetchval("SELECT 1")

            return {
                "status": "ready",
                "service": settings.app_name,
                "pool_size": pool.get_size(),
                "pool_idle": pool.get_idle_size()
            }
        except Exception as e:
            logger.error(f"Readiness check failed: {e}")
            raise ServiceUnavailableError(
                detail="Service not ready",
                database_error=str(e)
            )

    # Live check endpoint (Kubernetes style)
    @app.get("/live", tags=["Health"])
    async def liveness_check() -> Dict[str, str]:
        """Liveness check endpoint."""
        return {
            "status": "alive",
            "service": settings.app_name
        }

    @app.get(f"{API_PREFIX}/docs", tags=["Root"])
    async def api_docs() -> Dict[str, Any]:
        """Summary of the available endpoints and list parameters."""
        return api_summary()

    # Root endpoint
    @app.get("/", tags=["Root"])
    async def root() -> Dict[str, str]:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to the {settings.app_name}",
            "version": API_VERSION,
            "docs": f"{API_PREFIX}/docs",
            "health": "/health"
        }

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
