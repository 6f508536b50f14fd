"""
FastAPI application entry point for the Event Finder API.
"""

from contextlib import asynccontextmanager
from pathlib import Path

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import setup_error_handlers
from app.api.routers import api_router
from app.api.schemas.base import HealthResponse
from app.infra.config.database import get_engine, init_models
from app.infra.config.settings import get_settings
from app.infra.config.logging_config import setup_logging, get_logger
from app.infra.geo.geocoder import OpenCageGeocoder
from app.infra.middleware.request_context import RequestContextMiddleware

settings = get_settings()

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging()
    logger = get_logger("app")
    logger.info(
        "app.startup",
        app_name=settings.app_name,
        environment=settings.environment,
    )

    await init_models()

    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)

    # One pooled client for every outbound provider call
    app.state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds)
    )
    app.state.geocoder = OpenCageGeocoder.from_settings(settings, app.state.http_client)

    yield

    # Shutdown
    await app.state.http_client.aclose()
    await get_engine().dispose()
    logger.info("app.shutdown", app_name=settings.app_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Community event listings with location-aware search",
        version=API_VERSION,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # CORS middleware; credentials are needed for the session cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request context + logging middleware
    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)

    # Include routers
    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        """Liveness endpoint."""
        return {
            "message": f"{settings.app_name} is running",
            "version": API_VERSION,
            "status": "healthy",
        }

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Detailed health check endpoint."""
        return HealthResponse(service=settings.app_name, version=API_VERSION)

    return app


# Create FastAPI application
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info" if not settings.debug else "debug",
    )
