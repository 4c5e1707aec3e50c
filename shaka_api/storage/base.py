from abc import ABC, abstractmethod

from shaka_api.schemas.shaka import NewShaka, ShakaEvent

LIST_FAILED = "Failed to fetch shakas"
INSERT_FAILED = "Failed to save shaka"


class ShakaStore(ABC):
    """
    Persistence contract shared by the local and hosted backends.

    Implementations raise StorageError with LIST_FAILED / INSERT_FAILED
    on any backend fault and log the underlying detail themselves.
    """

    label: str = "unknown"

    async def create_schema(self) -> None:
        """Create tables and indexes if the backend needs it"""

    @abstractmethod
    async def list_shakas(self) -> list[ShakaEvent]:
        """All shakas, newest first"""

    @abstractmethod
    async def insert_shaka(self, new: NewShaka) -> ShakaEvent:
        """Persist a shaka and return it with its id and creation time"""

    async def close(self) -> None:
        """Release connections"""
