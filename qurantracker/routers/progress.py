from datetime import UTC, date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query

from qurantracker.dependencies import get_ledger
from qurantracker.schemas.api import (
    DashboardResponse,
    ExportResponse,
    RemainingResponse,
    StreakResponse,
    TodayResponse,
)
from qurantracker.schemas.ledger import Action, Progress, Reading
from qurantracker.services.ledger import ReadingLedger

router = APIRouter(prefix="/api", tags=["progress"])


@router.get("/progress", response_model=Progress)
async def get_progress(ledger: ReadingLedger = Depends(get_ledger)):
    return ledger.get_progress()


@router.get("/today", response_model=TodayResponse)
async def get_today(ledger: ReadingLedger = Depends(get_ledger)):
    reading = ledger.get_today_reading()
    goal = ledger.get_current_goal()
    pages_read = reading.pages_read if reading else 0
    return TodayResponse(
        read=reading is not None,
        pages_read=pages_read,
        daily_goal=goal.daily_goal,
        remaining=goal.daily_goal - pages_read,
        date=ledger.today(),
    )


@router.get("/streak", response_model=StreakResponse)
async def get_streak(ledger: ReadingLedger = Depends(get_ledger)):
    return StreakResponse(streak_days=ledger.get_streak())


@router.get("/remaining", response_model=RemainingResponse)
async def get_remaining(ledger: ReadingLedger = Depends(get_ledger)):
    needed = ledger.get_needed_per_day()
    return RemainingResponse(
        **needed.model_dump(),
        current_page=ledger.get_state("current_page"),
        total_pages=ledger.get_current_goal().target_pages,
    )


@router.get("/readings", response_model=list[Reading])
async def list_readings(ledger: ReadingLedger = Depends(get_ledger)):
    return ledger.get_ramadan_readings()


@router.get("/reading/{reading_date}", response_model=Reading)
async def get_reading(reading_date: date, ledger: ReadingLedger = Depends(get_ledger)):
    reading = ledger.get_reading_by_date(reading_date)
    if reading is None:
        raise HTTPException(status_code=404, detail="No reading found for this date")
    return reading


@router.get("/actions", response_model=list[Action])
async def list_actions(
    limit: int = Query(5, ge=1, le=50),
    ledger: ReadingLedger = Depends(get_ledger),
):
    return ledger.get_recent_actions(limit)


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(ledger: ReadingLedger = Depends(get_ledger)):
    return DashboardResponse(
        progress=ledger.get_progress(),
        recent_readings=ledger.get_last_days(7),
        total_entries=len(ledger.get_ramadan_readings()),
    )


@router.get("/export", response_model=ExportResponse)
async def export_data(ledger: ReadingLedger = Depends(get_ledger)):
    return ExportResponse(
        exported_at=datetime.now(UTC),
        progress=ledger.get_progress(),
        readings=ledger.get_all_readings(),
    )
