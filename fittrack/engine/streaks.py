"""Daily workout streak rules.

There are two distinct rules. ``apply_streak`` runs when a workout is
logged and never yields 0, because the day being logged counts. A gap of
more than one day restarts the streak at 1. ``correct_streak`` runs on
reads (login, profile) when nothing is being logged and drops a stale
streak to 0 for a user who stopped showing up.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel


class StreakState(BaseModel):
    streak_count: int
    last_activity_date: Optional[date] = None


def apply_streak(
    last_activity_date: Optional[date],
    today: date,
    streak_count: int = 0,
) -> StreakState:
    if last_activity_date is None:
        return StreakState(streak_count=1, last_activity_date=today)

    gap = (today - last_activity_date).days
    if gap <= 0:
        # Same day, or a backdated entry older than the latest activity
        return StreakState(streak_count=streak_count, last_activity_date=last_activity_date)
    if gap == 1:
        return StreakState(streak_count=streak_count + 1, last_activity_date=today)
    return StreakState(streak_count=1, last_activity_date=today)


def correct_streak(last_activity_date: Optional[date], today: date, streak_count: int) -> int:
    if last_activity_date is not None and (today - last_activity_date).days > 1:
        return 0
    return streak_count
