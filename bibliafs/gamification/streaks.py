"""Reading streak rule."""

from __future__ import annotations

from datetime import date
from typing import Optional


def next_streak(last_read_date: Optional[date], today: date, current_streak: int) -> int:
    """Streak after a reading recorded on ``today``.

    A first reading starts at 1, a second reading on the same day keeps the
    streak, a reading exactly one day later extends it and any longer gap
    restarts it at 1.
    """
    if last_read_date is None:
        return 1
    gap = (today - last_read_date).days
    if gap == 0:
        return current_streak
    if gap == 1:
        return current_streak + 1
    return 1
