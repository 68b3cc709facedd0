"""Exception types raised across FocusFlow.

Every error here is recoverable: callers catch it at the boundary where it is
detected and turn it into a user-facing notification or a CLI exit code.
"""

from __future__ import annotations


class FocusFlowError(Exception):
    """Base class for all FocusFlow errors."""


class ValidationError(FocusFlowError):
    """One or more timer durations are outside their allowed bounds."""

    def __init__(self, fields: dict[str, str]):
        self.fields = dict(fields)
        details = ", ".join(f"{name}: {msg}" for name, msg in self.fields.items())
        super().__init__(f"Invalid timer settings ({details})")


class PersistenceError(FocusFlowError):
    """The local settings store could not be read or written."""


class LoggingError(FocusFlowError):
    """A completed focus session could not be recorded on the backend."""


class BackendError(FocusFlowError):
    """The backend returned an error response or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class AuthenticationError(BackendError):
    """No valid session token is available for the backend."""
