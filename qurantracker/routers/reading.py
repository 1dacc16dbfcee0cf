from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from qurantracker.dependencies import get_ledger, get_notifier
from qurantracker.schemas.api import (
    DecreaseRequest,
    DecreaseResponse,
    LogRequest,
    LogResponse,
    SetPageRequest,
    SetPageResponse,
    UndoResponse,
)
from qurantracker.services.ledger import ReadingLedger
from qurantracker.services.notifier import Notifier, notify

router = APIRouter(prefix="/api", tags=["reading"])


@router.post("/log", response_model=LogResponse)
async def log_reading(
    data: LogRequest,
    ledger: ReadingLedger = Depends(get_ledger),
    notifier: Notifier = Depends(get_notifier),
):
    logged = await ledger.log_reading(data.pages, data.notes or "")
    progress = ledger.get_progress()

    if progress.today_done >= progress.daily_goal:
        await run_in_threadpool(
            notify,
            notifier,
            "🎉 Daily Goal Reached!",
            f"You've read {progress.today_done} pages today. Great job!",
        )

    return LogResponse(logged=logged, progress=progress)


@router.post("/undo", response_model=UndoResponse)
async def undo_last_action(ledger: ReadingLedger = Depends(get_ledger)):
    result = await ledger.undo_last_action()
    if not result.success:
        raise HTTPException(status_code=400, detail=result.error)

    if result.pages_removed:
        message = f"Undid {result.pages_removed} pages"
    else:
        message = f"Restored {result.pages_restored} pages"
    return UndoResponse(
        message=message,
        undone=result.undone,
        pages_removed=result.pages_removed,
        pages_restored=result.pages_restored,
        current_page=result.current_page,
        progress=ledger.get_progress(),
    )


@router.post("/decrease", response_model=DecreaseResponse)
async def decrease_pages(data: DecreaseRequest, ledger: ReadingLedger = Depends(get_ledger)):
    result = await ledger.decrease_pages(data.pages)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.error)

    return DecreaseResponse(
        message=f"Decreased by {result.pages_decreased or result.pages_removed} pages",
        pages_removed=result.pages_removed,
        pages_decreased=result.pages_decreased,
        remaining_today=result.remaining_today,
        current_page=result.current_page,
        progress=ledger.get_progress(),
    )


@router.post("/set-page", response_model=SetPageResponse)
async def set_page(data: SetPageRequest, ledger: ReadingLedger = Depends(get_ledger)):
    target = ledger.get_current_goal().target_pages
    if not 1 <= data.page <= target:
        raise HTTPException(status_code=400, detail=f"Page must be between 1 and {target}")

    await ledger.set_state("current_page", data.page)
    return SetPageResponse(current_page=data.page, progress=ledger.get_progress())
