from qurantracker.mcp.client import TrackerClient


async def log_reading(client: TrackerClient, pages: int, notes: str | None = None) -> dict:
    body: dict = {"pages": pages}
    if notes is not None:
        body["notes"] = notes
    return await client.post("/api/log", json=body)


async def undo_last_action(client: TrackerClient) -> dict:
    return await client.post("/api/undo")


async def decrease_pages(client: TrackerClient, pages: int) -> dict:
    return await client.post("/api/decrease", json={"pages": pages})


async def set_current_page(client: TrackerClient, page: int) -> dict:
    return await client.post("/api/set-page", json={"page": page})
