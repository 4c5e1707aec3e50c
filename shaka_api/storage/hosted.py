from datetime import datetime, timezone

import httpx
import structlog

from shaka_api.core.errors import StorageError
from shaka_api.schemas.shaka import NewShaka, ShakaEvent
from shaka_api.storage.base import INSERT_FAILED, LIST_FAILED, ShakaStore

logger = structlog.get_logger()

# Transport failures plus rows the backend returned in an unexpected shape
BACKEND_ERRORS = (httpx.HTTPError, ValueError, LookupError, TypeError, AttributeError)


class HostedShakaStore(ShakaStore):
    """
    Store backed by a hosted Postgres exposed over its REST interface
    (Supabase / PostgREST).

    Column names stay snake_case on the wire; mapping to the API shape
    goes through ShakaEvent.from_row like the SQL store.
    """

    label = "Supabase"
    table = "shakas"

    def __init__(
            self,
            base_url: str,
            api_key: str,
            timeout: float = 10.0,
            transport: httpx.AsyncBaseTransport | None = None
    ):
        self.client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
            },
            timeout=timeout,
            transport=transport
        )

    async def list_shakas(self) -> list[ShakaEvent]:
        try:
            response = await self.client.get(
                f"/{self.table}",
                params={"select": "*", "order": "created_at.desc,id.desc"}
            )
            response.raise_for_status()
            shakas = [ShakaEvent.from_row(row) for row in response.json()]
        except BACKEND_ERRORS as e:
            logger.error("shaka_list_failed", database=self.label, error=str(e))
            raise StorageError(LIST_FAILED) from e

        return shakas

    async def insert_shaka(self, new: NewShaka) -> ShakaEvent:
        record = {
            "latitude": new.latitude,
            "longitude": new.longitude,
            "location_name": new.location_name,
            "message": new.message,
            "user_agent": new.user_agent,
            "created_at": datetime.now(timezone.utc).isoformat()
        }
        try:
            response = await self.client.post(
                f"/{self.table}",
                json=[record],
                headers={"Prefer": "return=representation"}
            )
            response.raise_for_status()
            shaka = ShakaEvent.from_row(response.json()[0])
        except BACKEND_ERRORS as e:
            logger.error("shaka_insert_failed", database=self.label, error=str(e))
            raise StorageError(INSERT_FAILED) from e

        return shaka

    async def close(self) -> None:
        await self.client.aclose()
