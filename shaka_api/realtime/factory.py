from shaka_api.core.config import Settings
from shaka_api.realtime.broadcaster import (
    Broadcaster,
    ConnectionManager,
    LocalBroadcaster,
    RedisBroadcaster,
)


def build_broadcaster(settings: Settings, manager: ConnectionManager) -> Broadcaster:
    if settings.broadcast_backend == "redis":
        return RedisBroadcaster(manager, settings.redis_url, settings.broadcast_channel)
    return LocalBroadcaster(manager)
