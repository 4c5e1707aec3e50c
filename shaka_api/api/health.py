from datetime import datetime, timezone

from fastapi import APIRouter, Request

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health_check(request: Request):
    """Liveness plus the active storage backend"""
    return {
        "status": "healthy",
        "database": request.app.state.shaka_service.store.label,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": request.app.state.settings.version
    }
