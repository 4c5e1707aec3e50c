from datetime import datetime, timezone
from itertools import count

import pytest

from shaka_api.core.errors import ValidationError
from shaka_api.schemas.shaka import ShakaCreate, ShakaEvent
from shaka_api.services.content_filter import REPLACEMENT
from shaka_api.services.shakas import ShakaService
from shaka_api.storage.base import ShakaStore


class MemoryStore(ShakaStore):
    label = "memory"

    def __init__(self):
        self.rows = []
        self.ids = count(1)

    async def list_shakas(self):
        rows = sorted(self.rows, key=lambda row: (row["created_at"], row["id"]), reverse=True)
        return [ShakaEvent.from_row(row) for row in rows]

    async def insert_shaka(self, new):
        row = {**new.model_dump(), "id": next(self.ids), "created_at": datetime.now(timezone.utc)}
        self.rows.append(row)
        return ShakaEvent.from_row(row)


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def service(memory_store, broadcaster):
    return ShakaService(memory_store, broadcaster)


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [
    {},
    {"latitude": 21.3},
    {"longitude": -157.8},
    {"latitude": None, "longitude": 10},
])
async def test_missing_coordinates_rejected_before_storage(service, memory_store, broadcaster, body):
    with pytest.raises(ValidationError) as exc_info:
        await service.create_shaka(ShakaCreate(**body, message="this is dumb"))

    assert exc_info.value.message == "Latitude and longitude are required"
    assert exc_info.value.status_code == 400
    assert memory_store.rows == []
    assert broadcaster.published == []


@pytest.mark.asyncio
@pytest.mark.parametrize("latitude, longitude", [
    (91, 0), (-90.01, 0), (0, 181), (0, -180.5), (95, 200),
])
async def test_out_of_range_coordinates_rejected(service, memory_store, latitude, longitude):
    with pytest.raises(ValidationError) as exc_info:
        await service.create_shaka(ShakaCreate(latitude=latitude, longitude=longitude))

    assert exc_info.value.message == "Invalid coordinates"
    assert memory_store.rows == []


@pytest.mark.asyncio
@pytest.mark.parametrize("latitude, longitude", [
    (90, 180), (-90, -180), (0, 0),
])
async def test_boundary_and_zero_coordinates_accepted(service, latitude, longitude):
    shaka = await service.create_shaka(ShakaCreate(latitude=latitude, longitude=longitude))

    assert shaka.lat == latitude
    assert shaka.lng == longitude


@pytest.mark.asyncio
async def test_defaults_applied(service):
    shaka = await service.create_shaka(ShakaCreate(latitude=1, longitude=2))

    assert shaka.location_name == "Unknown Location"
    assert shaka.user_agent == "Unknown"
    assert shaka.message is None


@pytest.mark.asyncio
async def test_message_trimmed_and_filtered(service, memory_store):
    shaka = await service.create_shaka(
        ShakaCreate(latitude=1, longitude=2, location_name="Waikiki", message="  this is dumb  "),
        user_agent="kiosk/1.0"
    )

    assert shaka.message == f"this is {REPLACEMENT}"
    assert shaka.user_agent == "kiosk/1.0"
    assert memory_store.rows[0]["message"] == f"this is {REPLACEMENT}"


@pytest.mark.asyncio
async def test_blank_message_stored_as_null(service):
    shaka = await service.create_shaka(ShakaCreate(latitude=1, longitude=2, message="   "))

    assert shaka.message is None


@pytest.mark.asyncio
async def test_create_publishes_once_with_response_payload(service, broadcaster):
    shaka = await service.create_shaka(ShakaCreate(latitude=1, longitude=2))

    assert broadcaster.published == [("new-shaka", shaka.to_payload())]
    assert broadcaster.published[0][1]["locationName"] == "Unknown Location"


@pytest.mark.asyncio
async def test_list_is_newest_first(service):
    first = await service.create_shaka(ShakaCreate(latitude=1, longitude=1))
    second = await service.create_shaka(ShakaCreate(latitude=2, longitude=2))

    shakas = await service.list_shakas()

    assert [shaka.id for shaka in shakas] == [second.id, first.id]
