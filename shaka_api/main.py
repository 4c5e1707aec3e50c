from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import structlog
import time

from shaka_api.core.config import Settings, settings as default_settings
from shaka_api.core.errors import register_error_handlers
from shaka_api.core.logging import configure_logging
from shaka_api.api import health, realtime, shakas
from shaka_api.realtime.broadcaster import Broadcaster, ConnectionManager
from shaka_api.realtime.factory import build_broadcaster
from shaka_api.services.shakas import ShakaService
from shaka_api.storage.base import ShakaStore
from shaka_api.storage.factory import build_store

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle events"""
    settings: Settings = app.state.settings
    service: ShakaService = app.state.shaka_service

    logger.info(
        "application_startup",
        app_name=settings.app_name,
        database=service.store.label,
        port=settings.port
    )
    # A store that cannot be opened aborts startup
    if settings.auto_create_schema:
        await service.store.create_schema()
    await service.broadcaster.start()

    yield

    try:
        await service.broadcaster.stop()
    finally:
        await service.store.close()
    logger.info("application_shutdown")


def create_app(
        settings: Settings | None = None,
        store: ShakaStore | None = None,
        broadcaster: Broadcaster | None = None
) -> FastAPI:
    """Build the always-on API with its storage and broadcaster wired in"""
    settings = settings or default_settings

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan
    )

    connections = ConnectionManager()
    app.state.settings = settings
    app.state.connections = connections
    app.state.shaka_service = ShakaService(
        store=store or build_store(settings),
        broadcaster=broadcaster or build_broadcaster(settings, connections)
    )

    # Public kiosk app: any origin may read and post
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"]
    )

    # Middleware for logging requests
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start_time = time.time()

        response = await call_next(request)

        duration = time.time() - start_time
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2)
        )

        return response

    register_error_handlers(app)

    # Include routers
    app.include_router(shakas.router)
    app.include_router(health.router)
    app.include_router(realtime.router)

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": settings.app_name,
            "endpoints": {
                "health": "/api/health",
                "shakas": "/api/shakas",
                "stream": "/ws",
                "docs": "/docs"
            }
        }

    return app


app = create_app()
