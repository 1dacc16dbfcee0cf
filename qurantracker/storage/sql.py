"""Relational backend: scalar state as key/value rows plus goal, reading and action tables."""

import logging
from datetime import UTC, datetime

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from qurantracker import models
from qurantracker.database import Base
from qurantracker.database import engine as default_engine
from qurantracker.schemas.ledger import Action, Goal, LedgerState, Reading
from qurantracker.storage.base import StateStore, StorageError

logger = logging.getLogger(__name__)


def _scalar_rows(state: LedgerState) -> dict[str, str | None]:
    return {
        "current_page": str(state.current_page),
        "ramadan_year": str(state.ramadan_year),
        "last_read_date": state.last_read_date.isoformat() if state.last_read_date else None,
    }


class SqlStore(StateStore):
    name = "sqlite"
    windowed_totals = True

    def __init__(self, engine: AsyncEngine | None = None) -> None:
        self.engine = engine or default_engine
        self.sessionmaker = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)
        self._schema_ready = False

    async def _ensure_schema(self) -> None:
        if self._schema_ready:
            return
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._schema_ready = True

    async def load(self) -> LedgerState | None:
        try:
            await self._ensure_schema()
            async with self.sessionmaker() as session:
                rows = (await session.execute(select(models.State))).scalars().all()
                if not rows:
                    logger.info("No saved state in database")
                    return None
                values = {row.key: row.value for row in rows}
                year = int(values["ramadan_year"])

                goal = (
                    await session.execute(select(models.Goal).where(models.Goal.year == year))
                ).scalar_one_or_none()
                if goal is None:
                    logger.error("No goal stored for year %d", year)
                    return None

                readings = (
                    await session.execute(select(models.Reading).order_by(models.Reading.date))
                ).scalars().all()
                actions = (
                    await session.execute(select(models.Action).order_by(models.Action.id))
                ).scalars().all()

                return LedgerState(
                    current_page=int(values.get("current_page") or 1),
                    ramadan_year=year,
                    last_read_date=values.get("last_read_date"),
                    readings=[Reading.model_validate(r) for r in readings],
                    actions=[Action.model_validate(a) for a in actions],
                    goal=Goal.model_validate(goal),
                )
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load state: {e}") from e
        except (KeyError, ValueError) as e:
            logger.error("Stored state is invalid: %s", e)
            return None

    async def save(self, state: LedgerState) -> None:
        now = datetime.now(UTC)
        try:
            await self._ensure_schema()
            async with self.sessionmaker() as session, session.begin():
                for key, value in _scalar_rows(state).items():
                    await session.merge(models.State(key=key, value=value, updated_at=now))
                await session.merge(models.Goal(**state.goal.model_dump()))

                await session.execute(delete(models.Reading))
                await session.execute(delete(models.Action))
                session.add_all([models.Reading(**r.model_dump()) for r in state.readings])
                session.add_all([models.Action(**a.model_dump()) for a in state.actions])
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to save state: {e}") from e

    async def close(self) -> None:
        await self.engine.dispose()
