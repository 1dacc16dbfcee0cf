from datetime import datetime


def make_action_id(now: datetime, previous: int | None = None) -> int:
    """Millisecond timestamp id, bumped past ``previous`` so ids stay strictly increasing."""
    action_id = int(now.timestamp() * 1000)
    if previous is not None and action_id <= previous:
        action_id = previous + 1
    return action_id
