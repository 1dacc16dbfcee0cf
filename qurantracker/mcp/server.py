from fastmcp import FastMCP

from qurantracker.mcp.client import TrackerClient
from qurantracker.mcp.tools.progress import (
    get_dashboard as _get_dashboard,
    get_progress as _get_progress,
    get_reading as _get_reading,
    get_today as _get_today,
    send_reminder as _send_reminder,
)
from qurantracker.mcp.tools.reading import (
    decrease_pages as _decrease_pages,
    log_reading as _log_reading,
    set_current_page as _set_current_page,
    undo_last_action as _undo_last_action,
)


def create_mcp_server(client: TrackerClient) -> FastMCP:
    mcp = FastMCP(
        name="quran-tracker",
        instructions=(
            "Quran Tracker follows daily Quran reading toward a goal of finishing "
            "the mushaf within a date window. Log pages as they are read, undo or "
            "decrease mistakes, and check progress, streak and the pace needed to "
            "finish on time."
        ),
    )

    @mcp.tool()
    async def log_reading(pages: int, notes: str | None = None) -> dict:
        """Log pages read today, continuing from the current page."""
        return await _log_reading(client, pages=pages, notes=notes)

    @mcp.tool()
    async def undo_last_action() -> dict:
        """Undo the most recent log or decrease, one step at a time."""
        return await _undo_last_action(client)

    @mcp.tool()
    async def decrease_pages(pages: int) -> dict:
        """Remove pages from today's reading. Removing all of them deletes the entry."""
        return await _decrease_pages(client, pages=pages)

    @mcp.tool()
    async def set_current_page(page: int) -> dict:
        """Move the current page (the next unread page) directly."""
        return await _set_current_page(client, page=page)

    @mcp.tool()
    async def get_progress() -> dict:
        """Current page, pages completed, percent, streak and pages needed per day."""
        return await _get_progress(client)

    @mcp.tool()
    async def get_today() -> dict:
        """Pages read today and what is left of the daily goal."""
        return await _get_today(client)

    @mcp.tool()
    async def get_dashboard() -> dict:
        """Progress plus pages read on each of the last 7 days."""
        return await _get_dashboard(client)

    @mcp.tool()
    async def get_reading(reading_date: str) -> dict:
        """Reading logged on a date (YYYY-MM-DD)."""
        return await _get_reading(client, reading_date=reading_date)

    @mcp.tool()
    async def send_reminder() -> dict:
        """Send a reminder notification if nothing was read today."""
        return await _send_reminder(client)

    return mcp
