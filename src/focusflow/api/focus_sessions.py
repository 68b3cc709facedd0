"""Focus session endpoints."""

from __future__ import annotations

from focusflow.api.client import APIClient
from focusflow.api.results import Err, Ok, Result
from focusflow.errors import AuthenticationError, FocusFlowError, LoggingError
from focusflow.models.task import FocusSession, SessionType

RETURN_REPRESENTATION = {"Prefer": "return=representation"}


class FocusSessionsAPI:
    """Records completed focus intervals."""

    def __init__(self, client: APIClient):
        self.client = client

    async def log_session(
        self,
        duration_minutes: int,
        session_type: SessionType = "focus",
        task_id: int | None = None,
    ) -> Result[FocusSession]:
        """Insert one focus session and return the created record."""
        user_id = self.client.user_id
        if not user_id:
            return Err(AuthenticationError("Not logged in"))

        payload = {
            "user_id": user_id,
            "duration_minutes": duration_minutes,
            "session_type": session_type,
            "task_id": task_id,
        }
        try:
            response = await self.client.post(
                "/rest/v1/focus_sessions", json=payload, headers=RETURN_REPRESENTATION
            )
            rows = response.json()
            record = rows[0] if isinstance(rows, list) else rows
            return Ok(FocusSession.model_validate(record))
        except FocusFlowError as e:
            return Err(e)
        except (ValueError, IndexError, KeyError, TypeError) as e:
            return Err(LoggingError(f"Unexpected response: {e}"))

    async def list_sessions(self, limit: int = 20) -> list[FocusSession]:
        """Most recent focus sessions, newest first."""
        response = await self.client.get(
            "/rest/v1/focus_sessions",
            params={"select": "*", "order": "completed_at.desc", "limit": limit},
        )
        return [FocusSession.model_validate(row) for row in response.json()]
