import subprocess
from unittest.mock import patch

from qurantracker.services.notifier import CommandNotifier, notify


def _completed(returncode: int, stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout="", stderr=stderr)


def test_command_notifier_success():
    notifier = CommandNotifier(command="termux-notification", timeout=5.0)
    with patch("qurantracker.services.notifier.subprocess.run", return_value=_completed(0)) as run:
        assert notifier("Title", "Body") is True

    args = run.call_args.args[0]
    assert args == ["termux-notification", "--title", "Title", "--content", "Body", "--priority", "high"]
    assert run.call_args.kwargs["timeout"] == 5.0


def test_command_notifier_nonzero_exit():
    notifier = CommandNotifier()
    with patch("qurantracker.services.notifier.subprocess.run", return_value=_completed(1, "boom")):
        assert notifier("Title", "Body") is False


def test_command_notifier_missing_binary():
    notifier = CommandNotifier(command="definitely-not-installed")
    with patch("qurantracker.services.notifier.subprocess.run", side_effect=FileNotFoundError):
        assert notifier("Title", "Body") is False


def test_command_notifier_timeout():
    notifier = CommandNotifier(timeout=0.1)
    with patch(
        "qurantracker.services.notifier.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="termux-notification", timeout=0.1),
    ):
        assert notifier("Title", "Body") is False


def test_notify_swallows_errors():
    def broken(title, body):
        raise OSError("no display")

    assert notify(broken, "Title", "Body") is False


def test_notify_passes_through_result():
    calls = []

    def record(title, body):
        calls.append((title, body))
        return True

    assert notify(record, "Title", "Body") is True
    assert calls == [("Title", "Body")]
