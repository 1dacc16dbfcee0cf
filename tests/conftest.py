from datetime import UTC, date, datetime, time, timedelta

import pytest
from httpx import ASGITransport, AsyncClient

from qurantracker.app import create_app
from qurantracker.services.ledger import ReadingLedger
from qurantracker.storage import JsonFileStore

# Inside the default 2026-02-17..2026-03-18 window, 10 days before it ends
TODAY = date(2026, 3, 8)


class FakeClock:
    def __init__(self, day: date) -> None:
        self.day = day
        self._ticks = 0

    def today(self) -> date:
        return self.day

    def now(self) -> datetime:
        self._ticks += 1
        return datetime.combine(self.day, time(12), tzinfo=UTC) + timedelta(seconds=self._ticks)

    def advance(self, days: int = 1) -> None:
        self.day += timedelta(days=days)


@pytest.fixture
def clock():
    return FakeClock(TODAY)


@pytest.fixture
def data_path(tmp_path):
    return tmp_path / "quran-data.json"


@pytest.fixture
def store(data_path):
    return JsonFileStore(data_path)


@pytest.fixture
async def ledger(store, clock):
    ledger = ReadingLedger(store, today=clock.today, now=clock.now)
    await ledger.load()
    return ledger


@pytest.fixture
def notifications():
    return []


@pytest.fixture
def notifier(notifications):
    def record(title: str, body: str) -> bool:
        notifications.append((title, body))
        return True

    return record


@pytest.fixture
async def client(ledger, notifier):
    app = create_app(ledger=ledger, notifier=notifier)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
