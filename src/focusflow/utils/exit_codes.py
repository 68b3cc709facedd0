"""
Exit codes for FocusFlow CLI.

Semantic exit codes so scripts wrapping the CLI can tell failures apart.
"""

from focusflow.errors import (
    AuthenticationError,
    BackendError,
    PersistenceError,
    ValidationError,
)

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Authentication failure (not logged in, expired token)
ERROR_AUTH_FAILURE = 3

# Network or API error (server unreachable, timeout, etc.)
ERROR_NETWORK = 4

# Local storage could not be read or written
ERROR_STORAGE = 7


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_AUTH_FAILURE: "ERROR_AUTH_FAILURE",
        ERROR_NETWORK: "ERROR_NETWORK",
        ERROR_STORAGE: "ERROR_STORAGE",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def exit_code_for(exc: Exception) -> int:
    """Map an exception to the exit code a command should terminate with."""
    if isinstance(exc, ValidationError):
        return ERROR_INVALID_ARGS
    if isinstance(exc, AuthenticationError):
        return ERROR_AUTH_FAILURE
    if isinstance(exc, BackendError):
        return ERROR_NETWORK
    if isinstance(exc, PersistenceError):
        return ERROR_STORAGE
    return ERROR_GENERAL
