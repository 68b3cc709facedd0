"""Timer duration settings with persistent storage."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from focusflow.errors import PersistenceError, ValidationError
from focusflow.storage import JsonKeyValueStore
from focusflow.utils.logger import get_logger


class TimerMode(str, Enum):
    """Interval kinds the focus timer cycles through."""

    FOCUS = "focus"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def label(self) -> str:
        return {
            TimerMode.FOCUS: "Focus",
            TimerMode.SHORT_BREAK: "Short Break",
            TimerMode.LONG_BREAK: "Long Break",
        }[self]


class DurationSettings(BaseModel):
    """Configured length, in minutes, of each interval kind."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    focus_minutes: int = Field(
        default=25,
        ge=1,
        le=120,
        strict=True,
        validation_alias=AliasChoices("focus_minutes", "focus"),
    )
    short_break_minutes: int = Field(
        default=5,
        ge=1,
        le=30,
        strict=True,
        validation_alias=AliasChoices("short_break_minutes", "short_break"),
    )
    long_break_minutes: int = Field(
        default=15,
        ge=1,
        le=60,
        strict=True,
        validation_alias=AliasChoices("long_break_minutes", "long_break"),
    )

    def minutes_for(self, mode: TimerMode) -> int:
        """Duration in minutes of *mode*."""
        if mode == TimerMode.FOCUS:
            return self.focus_minutes
        elif mode == TimerMode.SHORT_BREAK:
            return self.short_break_minutes
        else:  # long break
            return self.long_break_minutes

    def seconds_for(self, mode: TimerMode) -> int:
        """Duration in seconds of *mode*."""
        return self.minutes_for(mode) * 60


DEFAULT_SETTINGS = DurationSettings()

# field name -> (storage key, short name used in error reports)
_FIELDS = {
    "focus_minutes": ("pomodoroDuration", "focus"),
    "short_break_minutes": ("shortBreakDuration", "short_break"),
    "long_break_minutes": ("longBreakDuration", "long_break"),
}


def _parse_minutes(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


class DurationSettingsStore:
    """Loads and saves ``DurationSettings`` through a key-value store."""

    def __init__(self, store: JsonKeyValueStore):
        self.store = store

    def load(self) -> DurationSettings:
        """Read the stored durations.

        Missing, non-numeric or out-of-range entries fall back to their
        default individually. An unreadable store yields all defaults.
        """
        try:
            entries = self.store.items()
        except PersistenceError as e:
            get_logger().warning("Timer settings unreadable, using defaults: %s", e)
            return DEFAULT_SETTINGS

        values: dict[str, int] = {}
        for field_name, (key, _) in _FIELDS.items():
            minutes = _parse_minutes(entries.get(key))
            field = DurationSettings.model_fields[field_name]
            if minutes is None or not _within_bounds(field_name, minutes):
                values[field_name] = field.default
            else:
                values[field_name] = minutes
        return DurationSettings(**values)

    def save(self, settings: DurationSettings | Mapping[str, Any]) -> DurationSettings:
        """Validate and persist all three durations.

        Raises:
            ValidationError: If any duration is outside its bounds; nothing is written
            PersistenceError: If the store cannot be written
        """
        if isinstance(settings, DurationSettings):
            data: Mapping[str, Any] = settings.model_dump()
        else:
            data = settings

        try:
            validated = DurationSettings.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(_offending_fields(e)) from e

        self.store.set_many(
            {
                key: str(getattr(validated, field_name))
                for field_name, (key, _) in _FIELDS.items()
            }
        )
        get_logger().info(
            "Timer settings saved: focus=%d short_break=%d long_break=%d",
            validated.focus_minutes,
            validated.short_break_minutes,
            validated.long_break_minutes,
        )
        return validated

    def reset(self) -> DurationSettings:
        """Restore and persist the default durations."""
        return self.save(DEFAULT_SETTINGS)


def _within_bounds(field_name: str, minutes: int) -> bool:
    try:
        DurationSettings.model_validate({field_name: minutes})
    except PydanticValidationError:
        return False
    return True


def _offending_fields(error: PydanticValidationError) -> dict[str, str]:
    aliases = {
        alias: short
        for field_name, (_, short) in _FIELDS.items()
        for alias in (field_name, short)
    }
    fields: dict[str, str] = {}
    for item in error.errors():
        loc = str(item["loc"][0]) if item["loc"] else "settings"
        fields.setdefault(aliases.get(loc, loc), item["msg"])
    return fields
