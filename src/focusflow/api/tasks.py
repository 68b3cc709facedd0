"""Tasks endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

from focusflow.api.client import APIClient
from focusflow.errors import BackendError
from focusflow.models.task import Task

RETURN_REPRESENTATION = {"Prefer": "return=representation"}


class TasksAPI:
    """Tasks API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_tasks(self) -> list[Task]:
        """List every task oldest first.

        Completed tasks are included so the task cache can serve both the
        pending view and completion toggles without another fetch.
        """
        params = {"select": "*", "order": "created_at"}
        response = await self.client.get("/rest/v1/tasks", params=params)
        return [Task.model_validate(row) for row in response.json()]

    async def set_completed(self, task_id: int, is_completed: bool) -> Task:
        """Mark a task done or not done and return the updated record."""
        response = await self.client.patch(
            "/rest/v1/tasks",
            params={"id": f"eq.{task_id}"},
            json={
                "is_completed": is_completed,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            },
            headers=RETURN_REPRESENTATION,
        )
        rows = response.json()
        if not rows:
            raise BackendError(f"Task {task_id} not found", status_code=404)
        return Task.model_validate(rows[0])
