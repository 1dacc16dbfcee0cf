import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from qurantracker.config import DAILY_GOAL, GOAL_END, GOAL_START, GOAL_YEAR, TARGET_PAGES


class Goal(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    year: int
    start_date: dt.date
    end_date: dt.date
    daily_goal: int = Field(ge=1)
    target_pages: int = Field(ge=1)

    @model_validator(mode="after")
    def validate_window(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    def contains(self, day: dt.date) -> bool:
        return self.start_date <= day <= self.end_date


class Reading(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: dt.date
    start_page: int
    end_page: int
    pages_read: int = Field(ge=0)
    completed: bool = True
    notes: str = ""
    updated_at: dt.datetime


class LoggedReading(Reading):
    action_id: int


class Action(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: Literal["add", "decrease"]
    date: dt.date
    pages: int = Field(ge=1)
    from_page: int | None = None  # cursor before an add
    to_page: int | None = None  # cursor after an add
    timestamp: dt.datetime


class LedgerState(BaseModel):
    """Full persisted snapshot, rewritten on every mutation."""

    model_config = ConfigDict(validate_assignment=True)

    current_page: int = 1
    ramadan_year: int
    last_read_date: dt.date | None = None
    readings: list[Reading] = []
    actions: list[Action] = []
    goal: Goal


class NeededPerDay(BaseModel):
    remaining: int
    days_left: int
    needed_per_day: int


class Progress(BaseModel):
    current_page: int
    total_pages: int
    completed: int
    remaining: int
    percent: str
    streak_days: int
    daily_goal: int
    today_done: int
    today_goal_remaining: int
    needed_per_day: int
    days_left: int
    ramadan_start: dt.date
    ramadan_end: dt.date
    recent_actions: list[Action] = []


class DayStatus(BaseModel):
    date: dt.date
    pages: int
    completed: bool


def default_goal() -> Goal:
    return Goal(
        year=GOAL_YEAR,
        start_date=dt.date.fromisoformat(GOAL_START),
        end_date=dt.date.fromisoformat(GOAL_END),
        daily_goal=DAILY_GOAL,
        target_pages=TARGET_PAGES,
    )


def default_state(goal: Goal | None = None) -> LedgerState:
    goal = goal or default_goal()
    return LedgerState(current_page=1, ramadan_year=goal.year, goal=goal)
