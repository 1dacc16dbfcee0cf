"""Best-effort desktop/phone notifications."""

import logging
import subprocess
from collections.abc import Callable

from qurantracker.config import NOTIFY_COMMAND, NOTIFY_TIMEOUT

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], bool]


class CommandNotifier:
    """Sends notifications through an external command (termux-notification by default)."""

    def __init__(self, command: str = NOTIFY_COMMAND, timeout: float = NOTIFY_TIMEOUT) -> None:
        self.command = command
        self.timeout = timeout

    def __call__(self, title: str, body: str) -> bool:
        args = [self.command, "--title", title, "--content", body, "--priority", "high"]
        try:
            result = subprocess.run(args, capture_output=True, text=True, timeout=self.timeout)
        except FileNotFoundError:
            logger.warning("Notification failed: %s is not available", self.command)
            return False
        except subprocess.TimeoutExpired:
            logger.warning("Notification failed: %s timed out after %.1fs", self.command, self.timeout)
            return False

        if result.returncode != 0:
            logger.warning("Notification failed (exit %d): %s", result.returncode, result.stderr.strip())
            return False
        logger.info("Notification sent: %s", title)
        return True


def notify(notifier: Notifier, title: str, body: str) -> bool:
    """Call ``notifier`` without letting its failures reach the caller."""
    try:
        return bool(notifier(title, body))
    except Exception:
        logger.warning("Notification failed: %s", title, exc_info=True)
        return False
