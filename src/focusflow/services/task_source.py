"""Task source for linking focus intervals to tasks.

Tasks are cached locally with an explicit staleness bound instead of being
refetched after every change. Records returned by mutations are merged
straight into the cache.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from focusflow.api.tasks import TasksAPI
from focusflow.models.task import Task
from focusflow.utils.logger import get_logger


class TaskSource:
    """Read-mostly view of the user's tasks."""

    def __init__(
        self,
        tasks_api: TasksAPI,
        ttl: float = 300,
        enabled: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.tasks_api = tasks_api
        self.ttl = ttl
        self.enabled = enabled
        self._clock = clock
        self._tasks: dict[int, Task] = {}
        self._fetched_at: float | None = None

    @property
    def is_stale(self) -> bool:
        """True when the cache is empty, disabled or older than the TTL."""
        if not self.enabled or self._fetched_at is None:
            return True
        return self._clock() - self._fetched_at > self.ttl

    async def refresh(self) -> list[Task]:
        """Refetch every task from the backend."""
        tasks = await self.tasks_api.list_tasks()
        self._tasks = {task.id: task for task in tasks}
        self._fetched_at = self._clock()
        get_logger().debug("Task cache refreshed: %d tasks", len(tasks))
        return list(self._tasks.values())

    async def all_tasks(self, force: bool = False) -> list[Task]:
        """Every task, refetching only if the cache is stale or *force* is set."""
        if force or self.is_stale:
            return await self.refresh()
        return list(self._tasks.values())

    async def pending_tasks(self, force: bool = False) -> list[Task]:
        """Incomplete tasks available for linking."""
        return [task for task in await self.all_tasks(force=force) if not task.is_completed]

    async def get(self, task_id: int) -> Task | None:
        """Look up one task by id."""
        was_stale = self.is_stale
        await self.all_tasks()
        if task_id not in self._tasks and not was_stale:
            # Unknown id may be a task created elsewhere since the last fetch
            await self.refresh()
        return self._tasks.get(task_id)

    def apply(self, task: Task) -> None:
        """Merge a record returned by the server into the cache."""
        self._tasks[task.id] = task

    def invalidate(self) -> None:
        """Force the next read to refetch."""
        self._fetched_at = None

    async def set_completed(self, task_id: int, is_completed: bool) -> Task:
        """Toggle completion on the server and apply the returned record."""
        task = await self.tasks_api.set_completed(task_id, is_completed)
        self.apply(task)
        return task
