from fastapi import APIRouter, Depends

from qurantracker import __version__
from qurantracker.dependencies import get_ledger
from qurantracker.schemas.api import HealthResponse
from qurantracker.services.ledger import ReadingLedger

router = APIRouter(tags=["health"])


@router.get("/", response_model=HealthResponse)
async def health(ledger: ReadingLedger = Depends(get_ledger)):
    return HealthResponse(status="ok", service="quran-tracker", version=__version__, mode=ledger.store.name)
