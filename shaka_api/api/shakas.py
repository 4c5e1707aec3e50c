# GET/POST /api/shakas

from fastapi import APIRouter, Depends, Header, status

from shaka_api.api.dependencies import get_shaka_service
from shaka_api.schemas.shaka import ShakaCreate, ShakaEvent
from shaka_api.services.shakas import ShakaService

router = APIRouter(prefix="/api/shakas", tags=["shakas"])


@router.get("", response_model=list[ShakaEvent])
async def list_shakas(service: ShakaService = Depends(get_shaka_service)):
    """All shakas, newest first"""
    return await service.list_shakas()


@router.post("", response_model=ShakaEvent, status_code=status.HTTP_201_CREATED)
async def create_shaka(
        payload: ShakaCreate | None = None,
        user_agent: str | None = Header(default=None),
        service: ShakaService = Depends(get_shaka_service)
):
    """
    Record a shaka and push it to live subscribers.

    - **latitude**, **longitude**: required, within [-90, 90] / [-180, 180]
    - **locationName**: defaults to "Unknown Location"
    - **message**: optional, filtered and capped at 50 characters
    """
    return await service.create_shaka(payload or ShakaCreate(), user_agent=user_agent)
