import pytest
from httpx import AsyncClient, ASGITransport

from shaka_api.core.config import Settings
from shaka_api.core.errors import ConfigurationError
from shaka_api.serverless import create_serverless_app
from shaka_api.services.content_filter import REPLACEMENT


@pytest.fixture
def serverless_client(settings, store):
    app = create_serverless_app(settings=settings, store=store)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_preflight_returns_empty_ok(serverless_client):
    async with serverless_client as client:
        response = await client.options("/api/shakas")

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-methods"] == "GET, POST, OPTIONS"


@pytest.mark.asyncio
async def test_unsupported_method(serverless_client):
    async with serverless_client as client:
        response = await client.delete("/api/shakas")

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}


@pytest.mark.asyncio
async def test_create_and_list(serverless_client):
    async with serverless_client as client:
        response = await client.post(
            "/api/shakas",
            json={"latitude": 21.3, "longitude": -157.8, "message": "you are STUPID"}
        )
        assert response.status_code == 201
        assert response.json()["message"] == f"you are {REPLACEMENT}"
        assert response.headers["access-control-allow-origin"] == "*"

        response = await client.get("/api/shakas")
        assert response.status_code == 200
        assert len(response.json()) == 1

        response = await client.post("/api/shakas", json={"latitude": 95, "longitude": 0})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid coordinates"}


def test_requires_hosted_credentials():
    with pytest.raises(ConfigurationError):
        create_serverless_app(settings=Settings(_env_file=None, supabase_url=None, supabase_anon_key=None))


@pytest.mark.asyncio
async def test_empty_body_reports_missing_coordinates(serverless_client):
    async with serverless_client as client:
        response = await client.post("/api/shakas")

    assert response.status_code == 400
    assert response.json() == {"error": "Latitude and longitude are required"}
