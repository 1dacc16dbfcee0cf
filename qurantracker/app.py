import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from qurantracker import __version__
from qurantracker.routers import health, notifications, progress, reading
from qurantracker.services.ledger import ReadingLedger
from qurantracker.services.notifier import CommandNotifier, Notifier
from qurantracker.storage import StorageError, build_store

logger = logging.getLogger(__name__)


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@asynccontextmanager
async def lifespan(app: FastAPI):
    ledger: ReadingLedger = app.state.ledger
    await ledger.load()
    yield
    await ledger.close()


def create_app(ledger: ReadingLedger | None = None, notifier: Notifier | None = None) -> FastAPI:
    app = FastAPI(title="Quran Tracker", version=__version__, lifespan=lifespan)
    app.state.ledger = ledger or ReadingLedger(build_store())
    app.state.notifier = notifier or CommandNotifier()

    # Local/Tailscale only, so any origin is allowed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_exception_handler(StorageError, storage_error_handler)

    app.include_router(health.router)
    app.include_router(progress.router)
    app.include_router(reading.router)
    app.include_router(notifications.router)
    return app


app = create_app()
