from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
import structlog

from shaka_api.core.database import backend_label, create_store_engine
from shaka_api.core.errors import StorageError
from shaka_api.models.shaka import Base, Shaka
from shaka_api.schemas.shaka import NewShaka, ShakaEvent
from shaka_api.storage.base import INSERT_FAILED, LIST_FAILED, ShakaStore

logger = structlog.get_logger()


def _row(shaka: Shaka) -> dict:
    return {
        "id": shaka.id,
        "latitude": shaka.latitude,
        "longitude": shaka.longitude,
        "location_name": shaka.location_name,
        "message": shaka.message,
        "user_agent": shaka.user_agent,
        "created_at": shaka.created_at
    }


class SqlShakaStore(ShakaStore):
    """Store backed by SQLAlchemy (SQLite file locally, any async DSN otherwise)"""

    def __init__(self, database_url: str, echo: bool = False, engine: AsyncEngine | None = None):
        self.engine = engine or create_store_engine(database_url, echo=echo)
        self.label = backend_label(database_url)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False
        )

    async def create_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("schema_ready", database=self.label)

    async def list_shakas(self) -> list[ShakaEvent]:
        stmt = select(Shaka).order_by(Shaka.created_at.desc(), Shaka.id.desc())
        try:
            async with self.session_factory() as session:
                result = await session.execute(stmt)
                rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("shaka_list_failed", database=self.label, error=str(e))
            raise StorageError(LIST_FAILED) from e

        return [ShakaEvent.from_row(_row(shaka)) for shaka in rows]

    async def insert_shaka(self, new: NewShaka) -> ShakaEvent:
        shaka = Shaka(
            latitude=new.latitude,
            longitude=new.longitude,
            location_name=new.location_name,
            message=new.message,
            user_agent=new.user_agent,
            created_at=datetime.now(timezone.utc)
        )
        try:
            async with self.session_factory() as session:
                session.add(shaka)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("shaka_insert_failed", database=self.label, error=str(e))
            raise StorageError(INSERT_FAILED) from e

        return ShakaEvent.from_row(_row(shaka))

    async def close(self) -> None:
        await self.engine.dispose()
