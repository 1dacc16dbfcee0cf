import pytest
from httpx import ASGITransport, AsyncClient

from qurantracker.app import create_app
from qurantracker.mcp.client import TrackerClient
from qurantracker.services.ledger import ReadingLedger
from qurantracker.storage import JsonFileStore, StorageError


@pytest.mark.asyncio
async def test_client_get_success(client):
    """Client.get returns parsed JSON for a successful response."""
    await client.post("/api/log", json={"pages": 3})

    tc = TrackerClient(client)
    result = await tc.get("/api/readings")
    assert isinstance(result, list)
    assert len(result) == 1
    assert result[0]["pages_read"] == 3


@pytest.mark.asyncio
async def test_client_get_404(client):
    """Client.get returns error dict for 404."""
    tc = TrackerClient(client)
    result = await tc.get("/api/reading/2026-02-18")
    assert result["error"] is True
    assert result["status"] == 404


@pytest.mark.asyncio
async def test_client_post_400(client):
    """Client.post returns error dict for a rejected undo."""
    tc = TrackerClient(client)
    result = await tc.post("/api/undo")
    assert result["error"] is True
    assert result["status"] == 400
    assert result["detail"] == "No actions to undo"


class BrokenStore(JsonFileStore):
    async def save(self, state):
        raise StorageError("disk full")


@pytest.mark.asyncio
async def test_client_raises_on_server_error(tmp_path, notifier):
    """Client raises for 5xx instead of handing the error to the tool caller."""
    ledger = ReadingLedger(BrokenStore(tmp_path / "quran-data.json"))
    app = create_app(ledger=ledger, notifier=notifier)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        tc = TrackerClient(http)
        with pytest.raises(RuntimeError, match="Server error 500"):
            await tc.get("/api/progress")
