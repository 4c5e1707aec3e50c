import structlog

from shaka_api.core.errors import ValidationError
from shaka_api.realtime.broadcaster import NEW_SHAKA_EVENT, Broadcaster
from shaka_api.schemas.shaka import (
    DEFAULT_LOCATION_NAME,
    DEFAULT_USER_AGENT,
    NewShaka,
    ShakaCreate,
    ShakaEvent,
)
from shaka_api.services.content_filter import filter_message
from shaka_api.storage.base import ShakaStore

logger = structlog.get_logger()


def validate_coordinates(latitude: float | None, longitude: float | None) -> None:
    """Presence first, then range"""
    if latitude is None or longitude is None:
        raise ValidationError("Latitude and longitude are required")

    if not (-90 <= latitude <= 90) or not (-180 <= longitude <= 180):
        raise ValidationError("Invalid coordinates")


class ShakaService:
    """Validate, filter, persist and announce shakas"""

    def __init__(self, store: ShakaStore, broadcaster: Broadcaster):
        self.store = store
        self.broadcaster = broadcaster

    async def list_shakas(self) -> list[ShakaEvent]:
        return await self.store.list_shakas()

    async def create_shaka(self, payload: ShakaCreate, user_agent: str | None = None) -> ShakaEvent:
        validate_coordinates(payload.latitude, payload.longitude)

        message = filter_message(payload.message.strip()) if payload.message else None

        new = NewShaka(
            latitude=payload.latitude,
            longitude=payload.longitude,
            location_name=payload.location_name or DEFAULT_LOCATION_NAME,
            message=message or None,
            user_agent=user_agent or DEFAULT_USER_AGENT
        )
        shaka = await self.store.insert_shaka(new)

        await self.broadcaster.publish(NEW_SHAKA_EVENT, shaka.to_payload())

        logger.info(
            "shaka_created",
            id=shaka.id,
            location_name=shaka.location_name,
            latitude=shaka.lat,
            longitude=shaka.lng
        )
        return shaka
