"""Backend record models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SessionType = Literal["focus", "deep_work"]


class Task(BaseModel):
    """A to-do item owned by the signed-in user."""

    model_config = ConfigDict(extra="ignore")

    id: int
    content: str
    is_completed: bool = False
    goal_id: int | None = None
    user_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FocusSession(BaseModel):
    """A completed focus interval as recorded by the backend."""

    model_config = ConfigDict(extra="ignore")

    id: int
    duration_minutes: int = Field(ge=1)
    session_type: SessionType = "focus"
    task_id: int | None = None
    user_id: str | None = None
    completed_at: datetime | None = None
