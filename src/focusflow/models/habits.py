"""Habit log records and streak calculation."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from pydantic import BaseModel, ConfigDict


class HabitLog(BaseModel):
    """One day on which a habit was ticked off."""

    model_config = ConfigDict(extra="ignore")

    id: int
    habit_id: int
    completed_at: date


class Habit(BaseModel):
    """A recurring habit inside a morning or evening routine."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    routine_id: int | None = None


def calculate_streak(habit_id: int, logs: Iterable[HabitLog], today: date | None = None) -> int:
    """Count consecutive completed days for *habit_id*.

    Several logs on the same date count once. A streak whose latest day is
    yesterday is still current, so it is not lost before the user has had a
    chance to log today. Anything older than yesterday breaks the streak.
    """
    if today is None:
        today = date.today()

    days = {log.completed_at for log in logs if log.habit_id == habit_id}
    if not days:
        return 0

    latest = max(days)
    if (today - latest).days > 1:
        return 0

    streak = 0
    current = latest
    while current in days:
        streak += 1
        current -= timedelta(days=1)
    return streak
