"""Reading ledger: the page cursor, one reading per day and the undo log.

Every mutation runs under a single lock, works on a deep copy of the state and
only publishes that copy once the store has saved it, so a failed write leaves
memory and disk at the previous snapshot.
"""

import asyncio
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Any

from qurantracker.id import make_action_id
from qurantracker.schemas.ledger import (
    Action,
    DayStatus,
    Goal,
    LedgerState,
    LoggedReading,
    NeededPerDay,
    Progress,
    Reading,
    default_state,
)
from qurantracker.storage.base import StateStore

logger = logging.getLogger(__name__)

SCALAR_KEYS = ("current_page", "ramadan_year", "last_read_date")


class LedgerError(ValueError):
    """Raised for input the ledger refuses outright."""


@dataclass
class UndoResult:
    success: bool
    undone: Action | None = None
    pages_removed: int = 0
    pages_restored: int = 0
    current_page: int | None = None
    error: str | None = None


@dataclass
class DecreaseResult:
    success: bool
    pages_removed: int | None = None
    pages_decreased: int | None = None
    remaining_today: int | None = None
    current_page: int | None = None
    error: str | None = None


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _find_reading(state: LedgerState, day: date) -> Reading | None:
    return next((r for r in state.readings if r.date == day), None)


def _next_action_id(state: LedgerState, now: datetime) -> int:
    previous = max((a.id for a in state.actions), default=None)
    return make_action_id(now, previous)


class ReadingLedger:
    def __init__(
        self,
        store: StateStore,
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.store = store
        self._today = today
        self._now = now
        self._state: LedgerState | None = None
        self._lock = asyncio.Lock()

    # -- lifecycle ------------------------------------------------------

    @property
    def loaded(self) -> bool:
        return self._state is not None

    @property
    def state(self) -> LedgerState:
        if self._state is None:
            raise RuntimeError("Ledger has not been loaded")
        return self._state

    async def load(self) -> LedgerState:
        """Read the saved snapshot, falling back to a fresh default state."""
        async with self._lock:
            state = await self.store.load()
            if state is None:
                logger.warning("No usable saved state, starting fresh")
                state = default_state()
                await self.store.save(state)
            self._state = state
        logger.info(
            "Loaded ledger: page %d, %d readings, %d actions",
            state.current_page, len(state.readings), len(state.actions),
        )
        return state

    async def ensure_loaded(self) -> None:
        if not self.loaded:
            await self.load()

    async def flush(self) -> None:
        async with self._lock:
            await self.store.save(self.state)

    async def close(self) -> None:
        await self.store.close()

    async def _commit(self, state: LedgerState) -> None:
        await self.store.save(state)
        self._state = state

    # -- state accessors --------------------------------------------------

    def get_state(self, key: str) -> Any:
        if key not in SCALAR_KEYS:
            raise KeyError(key)
        return getattr(self.state, key)

    async def set_state(self, key: str, value: Any) -> None:
        if key not in SCALAR_KEYS:
            raise KeyError(key)
        async with self._lock:
            state = self.state.model_copy(deep=True)
            setattr(state, key, value)
            await self._commit(state)
        logger.info("Set %s to %s", key, value)

    def get_current_goal(self) -> Goal:
        return self.state.goal

    def today(self) -> date:
        return self._today()

    # -- mutations --------------------------------------------------------

    async def log_reading(self, pages: int, notes: str = "") -> LoggedReading:
        """Record ``pages`` more pages read today, starting at the cursor."""
        if pages < 1:
            raise LedgerError("Pages must be >= 1")

        async with self._lock:
            state = self.state.model_copy(deep=True)
            today = self._today()
            now = self._now()
            start_page = state.current_page
            end_page = start_page + pages  # next unread page after this batch

            action = Action(
                id=_next_action_id(state, now),
                type="add",
                date=today,
                pages=pages,
                from_page=start_page,
                to_page=end_page,
                timestamp=now,
            )
            state.actions.append(action)

            reading = _find_reading(state, today)
            if reading is None:
                reading = Reading(
                    date=today,
                    start_page=start_page,
                    end_page=end_page - 1,
                    pages_read=pages,
                    notes=notes,
                    updated_at=now,
                )
                state.readings.append(reading)
            else:
                reading.pages_read += pages
                reading.end_page = end_page - 1
                reading.completed = True
                reading.notes = notes
                reading.updated_at = now

            state.current_page = end_page
            state.last_read_date = today
            await self._commit(state)

        logger.info("Logged %d pages on %s (pages %d-%d)", pages, today, start_page, end_page - 1)
        return LoggedReading(**reading.model_dump(), action_id=action.id)

    async def undo_last_action(self) -> UndoResult:
        """Reverse the most recent action, LIFO."""
        async with self._lock:
            state = self.state.model_copy(deep=True)
            if not state.actions:
                return UndoResult(success=False, error="No actions to undo")

            action = state.actions.pop()
            reading = _find_reading(state, action.date)
            now = self._now()

            if action.type == "add":
                if reading is not None:
                    reading.pages_read -= action.pages
                    reading.end_page = action.from_page - 1
                    reading.updated_at = now
                    if reading.pages_read <= 0:
                        state.readings.remove(reading)
                        remaining = [r.date for r in state.readings]
                        state.last_read_date = max(remaining) if remaining else None
                state.current_page = action.from_page
            elif reading is not None:
                # A decrease keeps no pre-image, so it is replayed additively.
                # After a full removal the reading is gone and nothing is restored.
                reading.pages_read += action.pages
                reading.end_page += action.pages
                reading.updated_at = now
                state.current_page += action.pages

            await self._commit(state)

        logger.info("Undid %s of %d pages on %s", action.type, action.pages, action.date)
        return UndoResult(
            success=True,
            undone=action,
            pages_removed=action.pages if action.type == "add" else 0,
            pages_restored=action.pages if action.type == "decrease" else 0,
            current_page=state.current_page,
        )

    async def decrease_pages(self, pages: int) -> DecreaseResult:
        """Take pages back off today's reading."""
        if pages < 1:
            raise LedgerError("Pages must be >= 1")

        async with self._lock:
            state = self.state.model_copy(deep=True)
            today = self._today()
            reading = _find_reading(state, today)
            if reading is None:
                return DecreaseResult(success=False, error="No reading today")

            now = self._now()
            if pages >= reading.pages_read:
                removed = reading.pages_read
                state.readings.remove(reading)
                state.current_page = reading.start_page
                state.last_read_date = None
                result = DecreaseResult(success=True, pages_removed=removed)
            else:
                removed = pages
                reading.pages_read -= pages
                reading.end_page -= pages
                reading.updated_at = now
                state.current_page -= pages
                result = DecreaseResult(
                    success=True, pages_decreased=pages, remaining_today=reading.pages_read
                )

            state.actions.append(
                Action(
                    id=_next_action_id(state, now),
                    type="decrease",
                    date=today,
                    pages=removed,
                    timestamp=now,
                )
            )
            await self._commit(state)

        result.current_page = state.current_page
        logger.info("Decreased today's reading by %d pages", removed)
        return result

    # -- queries ----------------------------------------------------------

    def get_today_reading(self) -> Reading | None:
        return _find_reading(self.state, self._today())

    def get_reading_by_date(self, day: date) -> Reading | None:
        return _find_reading(self.state, day)

    def get_ramadan_readings(self) -> list[Reading]:
        goal = self.state.goal
        readings = [r for r in self.state.readings if goal.contains(r.date)]
        return sorted(readings, key=lambda r: r.date, reverse=True)

    def get_all_readings(self) -> list[Reading]:
        return sorted(self.state.readings, key=lambda r: r.date, reverse=True)

    def _counted_readings(self) -> list[Reading]:
        if self.store.windowed_totals:
            return self.get_ramadan_readings()
        return self.state.readings

    def get_total_pages_read(self) -> int:
        return sum(r.pages_read for r in self._counted_readings())

    def get_streak(self) -> int:
        """Consecutive days with a reading, ending today (or yesterday if today is still open)."""
        readings = sorted(
            (r for r in self._counted_readings() if r.completed),
            key=lambda r: r.date,
            reverse=True,
        )
        if not readings:
            return 0

        today = self._today()
        check_date = today if readings[0].date == today else today - timedelta(days=1)
        streak = 0
        for reading in readings:
            if reading.date != check_date:
                break
            streak += 1
            check_date -= timedelta(days=1)
        return streak

    def get_needed_per_day(self) -> NeededPerDay:
        goal = self.state.goal
        remaining = goal.target_pages - self.get_total_pages_read()
        days_left = (goal.end_date - self._today()).days

        if days_left <= 0:
            return NeededPerDay(remaining=remaining, days_left=0, needed_per_day=remaining)
        return NeededPerDay(
            remaining=remaining,
            days_left=days_left,
            needed_per_day=math.ceil(remaining / days_left),
        )

    def get_recent_actions(self, limit: int = 5) -> list[Action]:
        if limit <= 0:
            return []
        return list(reversed(self.state.actions[-limit:]))

    def get_progress(self) -> Progress:
        goal = self.state.goal
        total = self.get_total_pages_read()
        today_reading = self.get_today_reading()
        today_done = today_reading.pages_read if today_reading else 0
        needed = self.get_needed_per_day()

        return Progress(
            current_page=self.state.current_page,
            total_pages=goal.target_pages,
            completed=total,
            remaining=goal.target_pages - total,
            percent=f"{total / goal.target_pages * 100:.1f}",
            streak_days=self.get_streak(),
            daily_goal=goal.daily_goal,
            today_done=today_done,
            today_goal_remaining=goal.daily_goal - today_done,
            needed_per_day=needed.needed_per_day,
            days_left=needed.days_left,
            ramadan_start=goal.start_date,
            ramadan_end=goal.end_date,
            recent_actions=self.get_recent_actions(3),
        )

    def get_last_days(self, days: int = 7) -> list[DayStatus]:
        """The last ``days`` calendar days ending today, zero-filled where nothing was read."""
        by_date = {r.date: r for r in self.get_ramadan_readings()}
        today = self._today()
        result = []
        for offset in range(days):
            day = today - timedelta(days=offset)
            reading = by_date.get(day)
            result.append(
                DayStatus(
                    date=day,
                    pages=reading.pages_read if reading else 0,
                    completed=reading.completed if reading else False,
                )
            )
        return result
