"""Tests for the fullscreen timer display."""

from __future__ import annotations

from io import StringIO
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console

from focusflow.models.focus.settings import DurationSettings, TimerMode
from focusflow.models.focus.timer import FocusTimer
from focusflow.models.task import Task
from focusflow.ui.timer_display import TimerDisplay

TASKS = [Task(id=1, content="Write report"), Task(id=2, content="Plan sprint")]


@pytest.fixture()
def timer(ticks) -> FocusTimer:
    return FocusTimer(DurationSettings(), tick_source_factory=ticks)


@pytest.fixture()
def display() -> TimerDisplay:
    console = Console(file=StringIO(), width=80, height=24, color_system=None)
    return TimerDisplay(console, tasks=TASKS)


def _render(display: TimerDisplay, timer: FocusTimer) -> str:
    display.console.print(display.create_layout(timer))
    return display.console.file.getvalue()


class TestLayout:
    def test_idle_focus(self, display, timer):
        output = _render(display, timer)
        assert "FocusFlow - Focus (paused)" in output
        assert "25:00" in output
        assert "0%" in output
        assert "space start" in output
        assert "t link task" in output

    def test_linked_task_title(self, display, timer):
        timer.select_task(2)
        assert "Plan sprint" in _render(display, timer)

    def test_break_header(self, display, timer):
        timer.switch_mode(TimerMode.LONG_BREAK)
        output = _render(display, timer)
        assert "Respite - Long Break" in output
        assert "15:00" in output

    def test_running_progress(self, display, timer, ticks):
        timer.start()
        ticks.current.fire(750)
        output = _render(display, timer)
        assert "12:30" in output
        assert "50%" in output
        assert "space pause" in output
        assert "(paused)" not in output

    def test_toast(self, display, timer):
        display.success("Focus session logged! Time for a break.")
        assert "Focus session logged!" in _render(display, timer)


class TestNotificationSink:
    def test_levels(self, display):
        display.success("ok")
        assert display.toast == ("green", "ok")
        display.info("fyi")
        assert display.toast == ("blue", "fyi")
        display.error("bad")
        assert display.toast == ("red", "bad")


class TestTaskTitle:
    def test_known_and_unknown(self, display):
        assert display.task_title(None) is None
        assert display.task_title(1) == "Write report"
        assert display.task_title(99) == "Task #99"


class TestKeys:
    def test_quit(self, display, timer):
        assert display.handle_key(timer, "q") is False

    def test_no_key(self, display, timer):
        assert display.handle_key(timer, None) is True
        assert not timer.is_running

    def test_space_toggles(self, display, timer):
        display.handle_key(timer, " ")
        assert timer.is_running
        display.handle_key(timer, "p")
        assert not timer.is_running

    def test_reset(self, display, timer, ticks):
        timer.start()
        ticks.current.fire(10)
        display.handle_key(timer, "r")
        assert timer.remaining_seconds == 25 * 60
        assert not timer.is_running

    @pytest.mark.parametrize(
        "key,mode",
        [("s", TimerMode.SHORT_BREAK), ("l", TimerMode.LONG_BREAK), ("f", TimerMode.FOCUS)],
    )
    def test_mode_keys(self, display, timer, key, mode):
        display.handle_key(timer, key)
        assert timer.mode == mode

    def test_unknown_key_ignored(self, display, timer):
        assert display.handle_key(timer, "x") is True
        assert timer.snapshot() == FocusTimer(DurationSettings()).snapshot()

    def test_cycle_task_wraps(self, display, timer):
        display.handle_key(timer, "t")
        assert timer.linked_task_id == 1
        display.handle_key(timer, "t")
        assert timer.linked_task_id == 2
        display.handle_key(timer, "t")
        assert timer.linked_task_id is None

    def test_cycle_task_ignored_while_running(self, display, timer):
        timer.start()
        display.cycle_task(timer)
        assert timer.linked_task_id is None


@pytest.mark.asyncio
async def test_run_until_quit(display, timer):
    keyboard = MagicMock()
    keyboard.get_key.side_effect = [" ", None, "q"]

    with patch("focusflow.ui.timer_display.Live"):
        await display.run(timer, keyboard, refresh=0)

    assert timer.is_running
    keyboard.stop.assert_called_once()
    timer.close()


@pytest.mark.asyncio
async def test_run_restores_keyboard_on_error(display, timer):
    keyboard = MagicMock()
    keyboard.get_key.side_effect = RuntimeError("tty gone")

    with patch("focusflow.ui.timer_display.Live"):
        with pytest.raises(RuntimeError):
            await display.run(timer, keyboard, refresh=0)

    keyboard.stop.assert_called_once()
