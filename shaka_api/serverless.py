"""
Per-request entry point for serverless hosting.

Exposes the same /api/shakas contract as the always-on app through
the shared ShakaService, with explicit CORS headers, an empty OPTIONS
preflight and 405 for anything else. There are no live subscribers
in this deployment, so nothing is broadcast.
"""

from fastapi import Depends, FastAPI, Header, Request, Response, status

from shaka_api.api.dependencies import get_shaka_service
from shaka_api.core.config import Settings, settings as default_settings
from shaka_api.core.errors import UnsupportedMethodError, register_error_handlers
from shaka_api.core.logging import configure_logging
from shaka_api.realtime.broadcaster import NullBroadcaster
from shaka_api.schemas.shaka import ShakaCreate, ShakaEvent
from shaka_api.services.shakas import ShakaService
from shaka_api.storage.base import ShakaStore
from shaka_api.storage.factory import build_hosted_store

configure_logging()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def create_serverless_app(
        settings: Settings | None = None,
        store: ShakaStore | None = None
) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(title=f"{settings.app_name} (serverless)", version=settings.version)
    app.state.settings = settings
    app.state.shaka_service = ShakaService(
        store=store or build_hosted_store(settings),
        broadcaster=NullBroadcaster()
    )

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    register_error_handlers(app)

    @app.options("/api/shakas")
    async def preflight():
        return Response(status_code=status.HTTP_200_OK)

    @app.get("/api/shakas", response_model=list[ShakaEvent])
    async def list_shakas(service: ShakaService = Depends(get_shaka_service)):
        return await service.list_shakas()

    @app.post("/api/shakas", response_model=ShakaEvent, status_code=status.HTTP_201_CREATED)
    async def create_shaka(
            payload: ShakaCreate | None = None,
            user_agent: str | None = Header(default=None),
            service: ShakaService = Depends(get_shaka_service)
    ):
        return await service.create_shaka(payload or ShakaCreate(), user_agent=user_agent)

    @app.api_route("/api/shakas", methods=["PUT", "PATCH", "DELETE"], include_in_schema=False)
    async def method_not_allowed():
        raise UnsupportedMethodError()

    return app
