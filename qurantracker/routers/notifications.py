from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from qurantracker.dependencies import get_ledger, get_notifier
from qurantracker.schemas.api import NotifyRequest, NotifyResponse, ReminderResponse
from qurantracker.services.ledger import ReadingLedger
from qurantracker.services.notifier import Notifier, notify

router = APIRouter(prefix="/api", tags=["notifications"])


@router.post("/notify", response_model=NotifyResponse)
async def send_notification(
    data: NotifyRequest | None = None,
    notifier: Notifier = Depends(get_notifier),
):
    title = data.title if data and data.title else "Quran Tracker"
    content = data.content if data and data.content else "Test notification"
    sent = await run_in_threadpool(notify, notifier, title, content)
    return NotifyResponse(sent=sent)


@router.post("/reminder", response_model=ReminderResponse)
async def send_reminder(
    ledger: ReadingLedger = Depends(get_ledger),
    notifier: Notifier = Depends(get_notifier),
):
    if ledger.get_today_reading() is not None:
        return ReminderResponse(reminder_sent=False, reason="already_read")

    goal = ledger.get_current_goal()
    await run_in_threadpool(
        notify,
        notifier,
        "📖 Quran Reading Reminder",
        f"You haven't read today! {goal.daily_goal} pages remaining.",
    )
    return ReminderResponse(reminder_sent=True, reason="no_reading_today")
