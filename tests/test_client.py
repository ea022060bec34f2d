# FILE: tests/test_client.py
"""VoyageClient against the real app and against canned responses"""
import asyncio
from datetime import date

import httpx
import pytest

from voyage.auth import issue_token
from voyage.client import VoyageAPIError, VoyageClient


@pytest.fixture
def asgi_client(app):
    return VoyageClient(base_url="http://voyage.test", transport=httpx.ASGITransport(app=app))


@pytest.mark.asyncio
async def test_crud_round_trip(asgi_client, sample_memory):
    token = issue_token("alice")

    async with asgi_client as api:
        created = await api.create_memory(
            token, dict(sample_memory, fromDate=date(2024, 6, 20), toDate=date(2024, 6, 20))
        )
        assert created["dateRange"] == "Jun 20, 2024"

        listing = await api.get_memories(token, year=2024, month=5)
        assert [m["_id"] for m in listing["memories"]] == [created["_id"]]
        assert "June" in listing["groupedMemories"]["2024"]

        updated = await api.update_memory(token, created["_id"], {"title": "Renamed"})
        assert updated["title"] == "Renamed"

        fetched = await api.get_memory(token, created["_id"])
        assert fetched["title"] == "Renamed"

        await api.delete_memory(token, created["_id"])
        assert await api.delete_all_memories(token) == 0


@pytest.mark.asyncio
async def test_errors_raise_api_error(asgi_client, sample_memory):
    token = issue_token("alice")

    async with asgi_client as api:
        with pytest.raises(VoyageAPIError) as exc_info:
            await api.create_memory(token, dict(sample_memory, fromDate="2025-03-09"))
        assert exc_info.value.status_code == 400
        assert exc_info.value.errors[0]["field"] == "toDate"

        with pytest.raises(VoyageAPIError) as exc_info:
            await api.get_memory(token, "0" * 32)
        assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_token_is_request_scoped():
    """Concurrent calls for different sessions each carry their own token"""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers["Authorization"])
        return httpx.Response(200, json={"memories": [], "groupedMemories": {}})

    async with VoyageClient(base_url="http://voyage.test", transport=httpx.MockTransport(handler)) as api:
        await asyncio.gather(api.get_memories("token-a"), api.get_memories("token-b"))
        assert "Authorization" not in api._client.headers

    assert sorted(seen) == ["Bearer token-a", "Bearer token-b"]


@pytest.mark.asyncio
async def test_query_params():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured.update(request.url.params)
        return httpx.Response(200, json={"memories": [], "groupedMemories": {}})

    async with VoyageClient(base_url="http://voyage.test", transport=httpx.MockTransport(handler)) as api:
        await api.get_memories("t", search="paris", month=0)

    assert captured == {"search": "paris", "month": "0"}


@pytest.mark.asyncio
async def test_non_json_error_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    async with VoyageClient(base_url="http://voyage.test", transport=httpx.MockTransport(handler)) as api:
        with pytest.raises(VoyageAPIError) as exc_info:
            await api.delete_all_memories("t")

    assert exc_info.value.status_code == 502
    assert exc_info.value.message == "Bad Gateway"


def test_date_helpers():
    assert VoyageClient.format_date(date(2025, 3, 1)) == "2025-03-01"
    assert VoyageClient.parse_date("2025-03-01T00:00:00.000Z") == date(2025, 3, 1)
