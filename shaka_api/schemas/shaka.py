# Pydantic schemas

from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DEFAULT_LOCATION_NAME = "Unknown Location"
DEFAULT_USER_AGENT = "Unknown"
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ShakaCreate(BaseModel):
    """
    Request body for POST /api/shakas.

    Coordinates are optional here so presence and range are checked by
    the service, in that order, with their own error messages.
    """

    latitude: float | None = None
    longitude: float | None = None
    location_name: str | None = None
    message: str | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NewShaka(BaseModel):
    """Validated, filtered record handed to a store for insertion"""

    latitude: float
    longitude: float
    location_name: str = DEFAULT_LOCATION_NAME
    message: str | None = None
    user_agent: str = DEFAULT_USER_AGENT


class ShakaEvent(BaseModel):
    """A stored shaka as returned by the API and pushed to subscribers"""

    id: int
    lat: float
    lng: float
    location_name: str
    message: str | None = None
    timestamp: int  # epoch milliseconds
    user_agent: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ShakaEvent":
        """Map a storage row (snake_case columns) to the API shape"""
        return cls(
            id=row["id"],
            lat=row["latitude"],
            lng=row["longitude"],
            location_name=row.get("location_name") or DEFAULT_LOCATION_NAME,
            message=row.get("message"),
            timestamp=to_epoch_millis(row["created_at"]),
            user_agent=row.get("user_agent") or DEFAULT_USER_AGENT
        )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def to_epoch_millis(value: datetime | str) -> int:
    """Convert a stored timestamp to epoch milliseconds; naive values are UTC"""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // timedelta(milliseconds=1)
