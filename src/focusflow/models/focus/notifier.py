"""Reports completed focus intervals to the session log."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from focusflow.api.results import Err, Ok, Result
from focusflow.errors import LoggingError
from focusflow.models.task import FocusSession, SessionType
from focusflow.ui.notifications import NotificationSink
from focusflow.utils.logger import get_logger

SessionLogger = Callable[[int, SessionType, "int | None"], Awaitable[Result[FocusSession]]]

SUCCESS_MESSAGE = "Focus session logged! Time for a break."
FAILURE_MESSAGE = "Failed to log session."


class SessionNotifier:
    """Fire-and-forget delivery of completed sessions.

    Delivery runs as a task on the event loop; its outcome only decides which
    notification the user sees. Failures are never retried or re-raised.
    """

    def __init__(self, log_session: SessionLogger, sink: NotificationSink):
        self.log_session = log_session
        self.sink = sink
        self._pending: set[asyncio.Task] = set()

    def notify(
        self,
        duration_minutes: int,
        session_type: SessionType = "focus",
        task_id: int | None = None,
    ) -> asyncio.Task:
        """Schedule delivery of one completed session and return immediately."""
        task = asyncio.get_running_loop().create_task(
            self._deliver(duration_minutes, session_type, task_id)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _deliver(
        self, duration_minutes: int, session_type: SessionType, task_id: int | None
    ) -> FocusSession | None:
        logger = get_logger()
        try:
            result = await self.log_session(duration_minutes, session_type, task_id)
        except Exception as e:
            result = Err(LoggingError(str(e)))

        if isinstance(result, Ok):
            logger.info(
                "Logged %s session: %d min (task=%s)", session_type, duration_minutes, task_id
            )
            self.sink.success(SUCCESS_MESSAGE)
            return result.value

        error = result.error
        if not isinstance(error, LoggingError):
            error = LoggingError(str(error))
        logger.warning("Could not log %s session: %s", session_type, error)
        self.sink.error(FAILURE_MESSAGE)
        return None

    @property
    def pending(self) -> int:
        """Number of deliveries still in flight."""
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for every in-flight delivery to finish."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
