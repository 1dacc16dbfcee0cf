from qurantracker.config import DATA_PATH, STORAGE_BACKEND
from qurantracker.storage.base import StateStore, StorageError
from qurantracker.storage.json_file import JsonFileStore
from qurantracker.storage.sql import SqlStore

__all__ = ["JsonFileStore", "SqlStore", "StateStore", "StorageError", "build_store"]


def build_store(backend: str = STORAGE_BACKEND) -> StateStore:
    if backend == "json":
        return JsonFileStore(DATA_PATH)
    if backend == "sql":
        return SqlStore()
    raise ValueError(f"Unknown storage backend: {backend}")
