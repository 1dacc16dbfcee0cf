"""Tests for the JSON file and SQL storage backends."""

import json
from datetime import date, datetime

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from qurantracker.schemas.ledger import Action, Reading, default_state
from qurantracker.services.ledger import ReadingLedger
from qurantracker.storage import JsonFileStore, SqlStore, StorageError, build_store


def _sample_state():
    state = default_state()
    stamp = datetime(2026, 3, 8, 12, 0)
    state.current_page = 11
    state.last_read_date = date(2026, 3, 8)
    state.readings.append(
        Reading(date=date(2026, 3, 8), start_page=1, end_page=10, pages_read=10, notes="fajr", updated_at=stamp)
    )
    state.actions.append(
        Action(id=1, type="add", date=date(2026, 3, 8), pages=10, from_page=1, to_page=11, timestamp=stamp)
    )
    return state


@pytest.fixture
async def sql_store(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'quran.db'}")
    store = SqlStore(engine)
    yield store
    await store.close()


# --- json file ---

@pytest.mark.asyncio
async def test_json_load_missing_file(store):
    assert await store.load() is None


@pytest.mark.asyncio
async def test_json_load_corrupted_file(store, data_path):
    data_path.write_text("{not json", encoding="utf-8")
    assert await store.load() is None


@pytest.mark.asyncio
async def test_json_load_invalid_snapshot(store, data_path):
    data_path.write_text(json.dumps({"current_page": "abc"}), encoding="utf-8")
    assert await store.load() is None


@pytest.mark.asyncio
async def test_json_snapshot_layout(store, data_path):
    await store.save(_sample_state())

    data = json.loads(data_path.read_text(encoding="utf-8"))
    assert set(data) == {"current_page", "ramadan_year", "last_read_date", "readings", "actions", "goal"}
    assert data["current_page"] == 11
    assert data["ramadan_year"] == 2026
    assert data["last_read_date"] == "2026-03-08"
    assert data["goal"] == {
        "year": 2026,
        "start_date": "2026-02-17",
        "end_date": "2026-03-18",
        "daily_goal": 5,
        "target_pages": 604,
    }
    assert data["readings"][0]["date"] == "2026-03-08"
    assert data["actions"][0]["type"] == "add"
    assert not data_path.with_name(data_path.name + ".tmp").exists()


@pytest.mark.asyncio
async def test_json_round_trip(store):
    state = _sample_state()
    await store.save(state)
    assert await store.load() == state


@pytest.mark.asyncio
async def test_json_save_failure_raises_storage_error(tmp_path):
    target = tmp_path / "occupied"
    target.mkdir()
    store = JsonFileStore(target)
    with pytest.raises(StorageError):
        await store.save(default_state())
    assert target.is_dir()


@pytest.mark.asyncio
async def test_ledger_recovers_from_corrupted_file(data_path, clock):
    data_path.write_text("garbage", encoding="utf-8")
    ledger = ReadingLedger(JsonFileStore(data_path), today=clock.today, now=clock.now)
    await ledger.load()

    assert ledger.get_state("current_page") == 1
    saved = json.loads(data_path.read_text(encoding="utf-8"))
    assert saved["readings"] == []
    assert saved["actions"] == []


# --- sql ---

@pytest.mark.asyncio
async def test_sql_load_empty_database(sql_store):
    assert await sql_store.load() is None


@pytest.mark.asyncio
async def test_sql_round_trip(sql_store):
    await sql_store.save(_sample_state())
    loaded = await sql_store.load()

    assert loaded.current_page == 11
    assert loaded.ramadan_year == 2026
    assert loaded.last_read_date == date(2026, 3, 8)
    assert loaded.goal == default_state().goal
    assert len(loaded.readings) == 1
    reading = loaded.readings[0]
    assert (reading.start_page, reading.end_page, reading.pages_read, reading.notes) == (1, 10, 10, "fajr")
    assert [(a.id, a.type, a.from_page, a.to_page) for a in loaded.actions] == [(1, "add", 1, 11)]


@pytest.mark.asyncio
async def test_sql_save_replaces_previous_snapshot(sql_store):
    await sql_store.save(_sample_state())
    await sql_store.save(default_state())

    loaded = await sql_store.load()
    assert loaded.current_page == 1
    assert loaded.last_read_date is None
    assert loaded.readings == []
    assert loaded.actions == []


@pytest.mark.asyncio
async def test_sql_ledger_only_counts_goal_window(sql_store, clock):
    ledger = ReadingLedger(sql_store, today=clock.today, now=clock.now)
    await ledger.load()

    clock.day = date(2026, 2, 10)
    await ledger.log_reading(4)
    clock.day = date(2026, 3, 8)
    await ledger.log_reading(2)

    assert ledger.get_total_pages_read() == 2
    assert ledger.get_streak() == 1
    assert len(ledger.get_all_readings()) == 2

    reloaded = ReadingLedger(sql_store, today=clock.today, now=clock.now)
    await reloaded.load()
    assert reloaded.get_state("current_page") == 7
    assert reloaded.get_today_reading().start_page == 5


@pytest.mark.asyncio
async def test_sql_ledger_undo_persists(sql_store, clock):
    ledger = ReadingLedger(sql_store, today=clock.today, now=clock.now)
    await ledger.load()
    await ledger.log_reading(5)
    await ledger.undo_last_action()

    loaded = await sql_store.load()
    assert loaded.readings == []
    assert loaded.actions == []
    assert loaded.current_page == 1


def test_build_store():
    assert isinstance(build_store("json"), JsonFileStore)
    assert isinstance(build_store("sql"), SqlStore)
    with pytest.raises(ValueError):
        build_store("redis")
