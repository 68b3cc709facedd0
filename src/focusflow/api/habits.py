"""Habit endpoints."""

from __future__ import annotations

from focusflow.api.client import APIClient
from focusflow.models.habits import Habit, HabitLog


class HabitsAPI:
    """Read access to habits and their daily logs."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_habits(self) -> list[Habit]:
        response = await self.client.get("/rest/v1/habits", params={"select": "*"})
        return [Habit.model_validate(row) for row in response.json()]

    async def list_logs(self) -> list[HabitLog]:
        response = await self.client.get("/rest/v1/habit_logs", params={"select": "*"})
        return [HabitLog.model_validate(row) for row in response.json()]
