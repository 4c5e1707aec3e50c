import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from shaka_api.core.config import Settings
from shaka_api.main import create_app
from shaka_api.realtime.broadcaster import Broadcaster
from shaka_api.storage.sql import SqlShakaStore


class RecordingBroadcaster(Broadcaster):
    """Keeps every published event for assertions"""

    def __init__(self):
        self.published = []

    async def publish(self, event, payload):
        self.published.append((event, payload))


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        environment="development",
        use_postgres=False,
        database_url=f"sqlite+aiosqlite:///{tmp_path}/shakas.db",
        database_url_sync=f"sqlite:///{tmp_path}/shakas.db",
        broadcast_backend="local"
    )


@pytest_asyncio.fixture
async def store(settings):
    store = SqlShakaStore(settings.database_url)
    await store.create_schema()
    yield store
    await store.close()


@pytest.fixture
def broadcaster():
    return RecordingBroadcaster()


@pytest_asyncio.fixture
async def client(settings, store, broadcaster):
    app = create_app(settings=settings, store=store, broadcaster=broadcaster)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
