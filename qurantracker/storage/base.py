from abc import ABC, abstractmethod

from qurantracker.schemas.ledger import LedgerState


class StorageError(RuntimeError):
    """Raised when a snapshot cannot be read from or written to the backend."""


class StateStore(ABC):
    """Loads and saves the whole ledger snapshot in one piece.

    ``windowed_totals`` marks backends whose totals and streaks only count
    readings inside the goal window.
    """

    name: str = "base"
    windowed_totals: bool = False

    @abstractmethod
    async def load(self) -> LedgerState | None:
        """Return the saved snapshot, or None when there is nothing usable."""

    @abstractmethod
    async def save(self, state: LedgerState) -> None:
        """Replace the saved snapshot. Must be all-or-nothing."""

    async def close(self) -> None:
        return None
