from qurantracker.models.action import Action
from qurantracker.models.goal import Goal
from qurantracker.models.reading import Reading
from qurantracker.models.state import State

__all__ = ["Action", "Goal", "Reading", "State"]
