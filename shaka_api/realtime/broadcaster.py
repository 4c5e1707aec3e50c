# Realtime fan-out to connected WebSocket subscribers

import asyncio
import json
from abc import ABC, abstractmethod
from typing import Any

from fastapi import WebSocket
import redis.asyncio as redis
from redis.exceptions import RedisError
import structlog

logger = structlog.get_logger()

NEW_SHAKA_EVENT = "new-shaka"


class ConnectionManager:
    """WebSocket connections held by this process"""

    def __init__(self):
        self.active: set[WebSocket] = set()

    async def connect(self, ws: WebSocket) -> None:
        await ws.accept()
        self.active.add(ws)
        logger.info("subscriber_connected", subscribers=len(self.active))

    def disconnect(self, ws: WebSocket) -> None:
        self.active.discard(ws)
        logger.info("subscriber_disconnected", subscribers=len(self.active))

    async def send_all(self, message: dict[str, Any]) -> int:
        """Send to every live socket, dropping the ones that fail. Returns deliveries."""
        dead: set[WebSocket] = set()
        delivered = 0
        for ws in list(self.active):
            try:
                await ws.send_json(message)
                delivered += 1
            except Exception as e:
                logger.warning("subscriber_send_failed", error=str(e))
                dead.add(ws)
        self.active -= dead
        return delivered


def frame(event: str, payload: dict[str, Any]) -> dict[str, Any]:
    return {"event": event, "data": payload}


class Broadcaster(ABC):
    """Fire-and-forget publisher; no replay, no acknowledgement"""

    async def start(self) -> None:
        pass

    async def stop(self) -> None:
        pass

    @abstractmethod
    async def publish(self, event: str, payload: dict[str, Any]) -> None:
        ...


class NullBroadcaster(Broadcaster):
    """Used where there is nobody to notify (per-request functions)"""

    async def publish(self, event: str, payload: dict[str, Any]) -> None:
        logger.debug("broadcast_skipped", event=event)


class LocalBroadcaster(Broadcaster):
    """Delivers straight to this process's subscribers"""

    def __init__(self, manager: ConnectionManager):
        self.manager = manager

    async def publish(self, event: str, payload: dict[str, Any]) -> None:
        delivered = await self.manager.send_all(frame(event, payload))
        logger.info("broadcast_sent", event=event, delivered=delivered)


class RedisBroadcaster(Broadcaster):
    """
    Publishes through a Redis channel so every worker process relays
    the event to its own subscribers.
    """

    def __init__(
            self,
            manager: ConnectionManager,
            redis_url: str,
            channel: str,
            client: Any = None
    ):
        self.manager = manager
        self.redis_url = redis_url
        self.channel = channel
        self.redis_client = client or redis.from_url(redis_url, decode_responses=True)
        self._listener: asyncio.Task | None = None

    async def start(self) -> None:
        pubsub = self.redis_client.pubsub()
        await pubsub.subscribe(self.channel)
        self._listener = asyncio.create_task(self._listen(pubsub))
        logger.info("broadcaster_started", redis_url=self.redis_url, channel=self.channel)

    async def stop(self) -> None:
        if self._listener is not None:
            self._listener.cancel()
            try:
                await self._listener
            except asyncio.CancelledError:
                pass
            except Exception as e:
                logger.error("broadcast_listener_failed", channel=self.channel, error=str(e))
            self._listener = None
        try:
            await self.redis_client.aclose()
        except RedisError as e:
            logger.warning("broadcaster_close_failed", channel=self.channel, error=str(e))
        logger.info("broadcaster_stopped", channel=self.channel)

    async def publish(self, event: str, payload: dict[str, Any]) -> None:
        try:
            await self.redis_client.publish(self.channel, json.dumps(frame(event, payload)))
        except RedisError as e:
            # Notification only; the shaka is already stored
            logger.error("broadcast_failed", event=event, error=str(e))

    async def relay(self, raw: str) -> None:
        try:
            message = json.loads(raw)
        except ValueError:
            logger.warning("broadcast_message_invalid", channel=self.channel)
            return
        await self.manager.send_all(message)

    async def _listen(self, pubsub) -> None:
        try:
            async for message in pubsub.listen():
                if message.get("type") == "message":
                    await self.relay(message["data"])
        except RedisError as e:
            # Relaying stops here; publishing keeps working until shutdown
            logger.error("broadcast_listener_failed", channel=self.channel, error=str(e))
        finally:
            try:
                await pubsub.unsubscribe(self.channel)
            except RedisError as e:
                logger.warning("broadcast_unsubscribe_failed", channel=self.channel, error=str(e))
            await pubsub.aclose()
