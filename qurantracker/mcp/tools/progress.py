from qurantracker.mcp.client import TrackerClient


async def get_progress(client: TrackerClient) -> dict:
    return await client.get("/api/progress")


async def get_today(client: TrackerClient) -> dict:
    return await client.get("/api/today")


async def get_dashboard(client: TrackerClient) -> dict:
    return await client.get("/api/dashboard")


async def get_reading(client: TrackerClient, reading_date: str) -> dict:
    return await client.get(f"/api/reading/{reading_date}")


async def send_reminder(client: TrackerClient) -> dict:
    """Send the daily reminder unless something was already read today."""
    return await client.post("/api/reminder")
