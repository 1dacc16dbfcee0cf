"""Flat-file backend: the ledger snapshot as a single JSON document."""

import json
import logging
import os
from contextlib import suppress
from pathlib import Path

from qurantracker.schemas.ledger import LedgerState
from qurantracker.storage.base import StateStore, StorageError

logger = logging.getLogger(__name__)


class JsonFileStore(StateStore):
    name = "json-db"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    async def load(self) -> LedgerState | None:
        if not self.path.exists():
            logger.info("No saved state at %s", self.path)
            return None
        try:
            return LedgerState.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error("Failed to load state from %s: %s", self.path, e)
            return None

    async def save(self, state: LedgerState) -> None:
        payload = json.dumps(state.model_dump(mode="json"), indent=2, ensure_ascii=False) + "\n"
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            # Readers see either the old file or the new one, never a partial write
            os.replace(tmp_path, self.path)
        except OSError as e:
            with suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Failed to save state to {self.path}: {e}") from e
