"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer

from focusflow.errors import AuthenticationError, FocusFlowError
from focusflow.services.config_service import get_config_service
from focusflow.ui.formatters import format_error
from focusflow.utils.exit_codes import exit_code_for
from focusflow.utils.logger import get_logger


def _require_auth() -> None:
    """Require a signed-in user."""
    credentials = get_config_service().load_credentials()
    if not credentials or not credentials.get("token"):
        raise AuthenticationError("Not logged in. Use 'focusflow auth login' to sign in.")


def command_wrapper(_func: Callable | None = None, *, auth_required: bool = False):
    """Decorator to wrap command functions with common functionality.

    Runs async commands on a fresh event loop, logs timing, and turns
    FocusFlow errors into a formatted message plus a semantic exit code.
    """

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)
            try:
                if auth_required:
                    _require_auth()

                if inspect.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)

                elapsed = time.monotonic() - start
                logger.info("command completed: %s (%.3fs)", cmd, elapsed)
                return result

            except FocusFlowError as e:
                elapsed = time.monotonic() - start
                logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
                format_error(str(e))
                raise typer.Exit(code=exit_code_for(e)) from e

            except typer.Exit:
                # Re-raise Typer's own exits (like --help or explicit Exit(0))
                raise

            except Exception as e:
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    elapsed,
                    str(e),
                    traceback.format_exc(),
                )
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=exit_code_for(e)) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
