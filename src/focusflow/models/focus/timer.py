"""Focus timer state machine.

The timer cycles Focus -> Short Break -> Focus ... and takes a Long Break
after every fourth completed focus interval. It is driven by a one-second
tick source; at most one source is alive at a time and every transition that
stops the countdown cancels it first.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace

from focusflow.models.focus.settings import DEFAULT_SETTINGS, DurationSettings, TimerMode
from focusflow.models.focus.ticks import AsyncioTickSource, TickSource
from focusflow.ui.notifications import NotificationSink
from focusflow.utils.logger import get_logger

SESSIONS_BEFORE_LONG_BREAK = 4
BREAK_OVER_MESSAGE = "Break's over! Ready for another focus session?"


@dataclass
class TimerState:
    """Snapshot of the timer."""

    mode: TimerMode = TimerMode.FOCUS
    remaining_seconds: int = 0
    is_running: bool = False
    completed_focus_count: int = 0
    linked_task_id: int | None = None


class FocusTimer:
    """Countdown state machine for focus and break intervals."""

    def __init__(
        self,
        settings: DurationSettings = DEFAULT_SETTINGS,
        notifier=None,
        sink: NotificationSink | None = None,
        tick_source_factory: Callable[[], TickSource] = AsyncioTickSource,
        on_complete: Callable[[TimerMode], None] | None = None,
    ):
        """
        Args:
            settings: Interval durations
            notifier: Receives ``notify(minutes, "focus", task_id)`` when a focus
                interval completes; None disables session logging
            sink: Receives informational messages (break over, logging errors)
            tick_source_factory: Builds a fresh tick source on every start
            on_complete: Called with the finished mode after each interval
        """
        self.settings = settings
        self.notifier = notifier
        self.sink = sink
        self.on_complete = on_complete
        self._tick_source_factory = tick_source_factory
        self._source: TickSource | None = None
        self._interval_minutes = settings.minutes_for(TimerMode.FOCUS)
        self.state = TimerState(remaining_seconds=self._interval_minutes * 60)

    # -- read-only view ---------------------------------------------------

    @property
    def mode(self) -> TimerMode:
        return self.state.mode

    @property
    def remaining_seconds(self) -> int:
        return self.state.remaining_seconds

    @property
    def is_running(self) -> bool:
        return self.state.is_running

    @property
    def completed_focus_count(self) -> int:
        return self.state.completed_focus_count

    @property
    def linked_task_id(self) -> int | None:
        return self.state.linked_task_id

    @property
    def total_seconds(self) -> int:
        """Length of the current interval."""
        return self._interval_minutes * 60

    @property
    def progress(self) -> float:
        """Elapsed share of the current interval, 0-100."""
        total = self.total_seconds
        if total <= 0:
            return 0.0
        return (total - self.state.remaining_seconds) / total * 100

    @property
    def display_time(self) -> str:
        """Remaining time as MM:SS."""
        mins, secs = divmod(self.state.remaining_seconds, 60)
        return f"{mins:02d}:{secs:02d}"

    def snapshot(self) -> TimerState:
        """Return a copy of the current state."""
        return replace(self.state)

    # -- commands ---------------------------------------------------------

    def start(self) -> bool:
        """Start counting down. Returns False if nothing was started."""
        if self.state.is_running or self.state.remaining_seconds <= 0:
            return False

        self._release_source()
        source = self._tick_source_factory()
        self._source = source
        self.state.is_running = True
        try:
            source.start(lambda: self._on_source_tick(source))
        except Exception:
            self._source = None
            self.state.is_running = False
            raise

        get_logger().debug(
            "Timer started: %s, %ds left", self.state.mode.value, self.state.remaining_seconds
        )
        return True

    def pause(self) -> None:
        """Stop counting down, keeping the remaining time."""
        self._release_source()
        self.state.is_running = False

    def toggle(self) -> None:
        """Start when paused, pause when running."""
        if self.state.is_running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """Restart the current interval from its configured duration."""
        self.switch_mode(self.state.mode)

    def switch_mode(self, mode: TimerMode) -> None:
        """Enter *mode* with its full configured duration, not running."""
        self._release_source()
        self.state.is_running = False
        self.state.mode = mode
        self._interval_minutes = self.settings.minutes_for(mode)
        self.state.remaining_seconds = self._interval_minutes * 60
        get_logger().debug("Timer switched to %s (%d min)", mode.value, self._interval_minutes)

    def on_settings_changed(self, settings: DurationSettings) -> None:
        """Adopt new durations.

        An idle timer is reset to the new duration of its current mode. A
        running countdown is left alone; the new durations apply from the next
        reset or mode switch.
        """
        self.settings = settings
        if not self.state.is_running:
            self.switch_mode(self.state.mode)

    def select_task(self, task_id: int | None) -> bool:
        """Link a task to the coming focus interval.

        Only allowed while idle in focus mode; otherwise the selection is
        ignored and False is returned.
        """
        if self.state.is_running or self.state.mode != TimerMode.FOCUS:
            get_logger().debug("Ignoring task selection %s while %s", task_id, self._describe())
            return False
        self.state.linked_task_id = task_id
        return True

    def tick(self) -> None:
        """Advance the countdown by one second."""
        if not self.state.is_running:
            return

        self.state.remaining_seconds = max(0, self.state.remaining_seconds - 1)
        if self.state.remaining_seconds == 0:
            self._release_source()
            self.state.is_running = False
            self.on_interval_complete(self.state.mode)

    def on_interval_complete(self, mode: TimerMode) -> None:
        """Log a finished focus interval and move to the next interval."""
        logger = get_logger()
        if mode == TimerMode.FOCUS:
            if self.notifier is not None:
                try:
                    self.notifier.notify(
                        self._interval_minutes, "focus", self.state.linked_task_id
                    )
                except Exception as e:
                    logger.warning("Could not schedule session logging: %s", e)
                    if self.sink is not None:
                        self.sink.error("Failed to log session.")
            self.state.completed_focus_count += 1
            if self.state.completed_focus_count % SESSIONS_BEFORE_LONG_BREAK == 0:
                next_mode = TimerMode.LONG_BREAK
            else:
                next_mode = TimerMode.SHORT_BREAK
        else:
            if self.sink is not None:
                self.sink.info(BREAK_OVER_MESSAGE)
            next_mode = TimerMode.FOCUS

        logger.info(
            "%s interval complete (%d focus sessions so far)",
            mode.label,
            self.state.completed_focus_count,
        )
        self.switch_mode(next_mode)
        if self.on_complete is not None:
            self.on_complete(mode)

    def close(self) -> None:
        """Release the tick source. Safe to call more than once."""
        self.pause()

    def __enter__(self) -> FocusTimer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -- internals --------------------------------------------------------

    def _on_source_tick(self, source: TickSource) -> None:
        if source is not self._source:
            return  # stale source
        self.tick()

    def _release_source(self) -> None:
        source, self._source = self._source, None
        if source is not None:
            source.cancel()

    def _describe(self) -> str:
        state = "running" if self.state.is_running else "idle"
        return f"{state} in {self.state.mode.value}"
