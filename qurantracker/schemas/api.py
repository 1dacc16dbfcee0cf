import datetime as dt
from typing import Literal

from pydantic import BaseModel, Field

from qurantracker.schemas.ledger import (
    Action,
    DayStatus,
    LoggedReading,
    NeededPerDay,
    Progress,
    Reading,
)


class LogRequest(BaseModel):
    pages: int = Field(ge=1)
    notes: str | None = None


class DecreaseRequest(BaseModel):
    pages: int = Field(ge=1)


class SetPageRequest(BaseModel):
    page: int  # range depends on the goal, checked in the endpoint


class NotifyRequest(BaseModel):
    title: str | None = None
    content: str | None = None


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    mode: str


class TodayResponse(BaseModel):
    read: bool
    pages_read: int
    daily_goal: int
    remaining: int
    date: dt.date


class LogResponse(BaseModel):
    success: bool = True
    logged: LoggedReading
    progress: Progress


class UndoResponse(BaseModel):
    success: bool = True
    message: str
    undone: Action
    pages_removed: int
    pages_restored: int
    current_page: int
    progress: Progress


class DecreaseResponse(BaseModel):
    success: bool = True
    message: str
    pages_removed: int | None = None
    pages_decreased: int | None = None
    remaining_today: int | None = None
    current_page: int
    progress: Progress


class SetPageResponse(BaseModel):
    success: bool = True
    current_page: int
    progress: Progress


class StreakResponse(BaseModel):
    streak_days: int


class RemainingResponse(NeededPerDay):
    current_page: int
    total_pages: int


class DashboardResponse(BaseModel):
    progress: Progress
    recent_readings: list[DayStatus]
    total_entries: int


class ExportResponse(BaseModel):
    exported_at: dt.datetime
    progress: Progress
    readings: list[Reading]


class NotifyResponse(BaseModel):
    sent: bool


class ReminderResponse(BaseModel):
    reminder_sent: bool
    reason: Literal["no_reading_today", "already_read"]
