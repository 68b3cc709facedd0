"""Notification sinks for transient user-facing messages."""

from __future__ import annotations

from typing import Protocol

from focusflow.ui.formatters import format_error, format_info, format_success


class NotificationSink(Protocol):
    """Accepts success/info/error messages for display. Fire-and-forget."""

    def success(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleSink:
    """Prints notifications through the shared rich console."""

    def success(self, message: str) -> None:
        format_success(message)

    def info(self, message: str) -> None:
        format_info(message)

    def error(self, message: str) -> None:
        format_error(message)
