import structlog

from shaka_api.core.config import Settings
from shaka_api.core.errors import ConfigurationError
from shaka_api.storage.base import ShakaStore
from shaka_api.storage.hosted import HostedShakaStore
from shaka_api.storage.sql import SqlShakaStore

logger = structlog.get_logger()


def build_hosted_store(settings: Settings) -> HostedShakaStore:
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise ConfigurationError(
            "SUPABASE_URL and SUPABASE_ANON_KEY are required for the hosted store"
        )
    return HostedShakaStore(
        settings.supabase_url,
        settings.supabase_anon_key,
        timeout=settings.hosted_timeout
    )


def build_store(settings: Settings) -> ShakaStore:
    """Pick the storage backend once, from configuration"""
    if settings.use_hosted_store:
        store = build_hosted_store(settings)
    else:
        store = SqlShakaStore(settings.database_url, echo=settings.debug)

    logger.info("store_selected", database=store.label, environment=settings.environment)
    return store
