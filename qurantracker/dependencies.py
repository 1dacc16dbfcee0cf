from fastapi import Request

from qurantracker.services.ledger import ReadingLedger
from qurantracker.services.notifier import Notifier


async def get_ledger(request: Request) -> ReadingLedger:
    ledger: ReadingLedger = request.app.state.ledger
    await ledger.ensure_loaded()
    return ledger


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier
