# DB connections

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool


def create_store_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Async engine for the request path"""
    if database_url.startswith("sqlite"):
        # In-memory SQLite must share one connection or every session sees an empty DB
        if ":memory:" in database_url:
            return create_async_engine(
                database_url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool
            )
        return create_async_engine(database_url, echo=echo)

    return create_async_engine(
        database_url,
        echo=echo,
        pool_size=20,
        max_overflow=0
    )


def create_sync_engine(database_url_sync: str, echo: bool = False) -> Engine:
    """Sync engine for CLI scripts"""
    return create_engine(database_url_sync, echo=echo)


def backend_label(database_url: str) -> str:
    if database_url.startswith("sqlite"):
        return "SQLite"
    if database_url.startswith("postgresql"):
        return "PostgreSQL"
    return database_url.split(":", 1)[0]
