import os
from pathlib import Path

STORAGE_BACKEND = os.environ.get("QURANTRACKER_STORAGE", "json")
DATA_PATH = os.environ.get("QURANTRACKER_DATA_PATH", str(Path.cwd() / "quran-data.json"))
DB_PATH = os.environ.get("QURANTRACKER_DB_PATH", str(Path.cwd() / "quran.db"))
DATABASE_URL = f"sqlite+aiosqlite:///{DB_PATH}"

HOST = os.environ.get("QURANTRACKER_HOST", "0.0.0.0")
PORT = int(os.environ.get("QURANTRACKER_PORT", "8080"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# Notification settings (termux-api on Android)
NOTIFY_COMMAND = os.environ.get("QURANTRACKER_NOTIFY_COMMAND", "termux-notification")
NOTIFY_TIMEOUT = float(os.environ.get("QURANTRACKER_NOTIFY_TIMEOUT", "10.0"))

# Default reading plan, used when no saved state exists
GOAL_YEAR = int(os.environ.get("QURANTRACKER_GOAL_YEAR", "2026"))
GOAL_START = os.environ.get("QURANTRACKER_GOAL_START", "2026-02-17")
GOAL_END = os.environ.get("QURANTRACKER_GOAL_END", "2026-03-18")
DAILY_GOAL = int(os.environ.get("QURANTRACKER_DAILY_GOAL", "5"))
TARGET_PAGES = int(os.environ.get("QURANTRACKER_TARGET_PAGES", "604"))
