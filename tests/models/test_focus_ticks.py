"""Tests for the asyncio tick source and the timer running on it."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from focusflow.api.results import Ok
from focusflow.models.focus.notifier import SUCCESS_MESSAGE, SessionNotifier
from focusflow.models.focus.settings import DurationSettings, TimerMode
from focusflow.models.focus.ticks import AsyncioTickSource
from focusflow.models.focus.timer import FocusTimer
from focusflow.models.task import FocusSession


@pytest.mark.asyncio
async def test_fires_periodically_until_cancelled():
    callback = MagicMock()
    source = AsyncioTickSource(interval=0.01)
    source.start(callback)
    assert source.active

    await asyncio.sleep(0.1)
    source.cancel()
    fired = callback.call_count
    assert fired >= 3

    await asyncio.sleep(0.05)
    assert callback.call_count == fired
    assert not source.active


@pytest.mark.asyncio
async def test_callback_may_cancel_its_own_source():
    source = AsyncioTickSource(interval=0.005)
    callback = MagicMock(side_effect=lambda: source.cancel())
    source.start(callback)

    await asyncio.sleep(0.05)
    callback.assert_called_once()


@pytest.mark.asyncio
async def test_cannot_restart_after_cancel():
    source = AsyncioTickSource(interval=0.01)
    source.start(MagicMock())
    source.cancel()
    with pytest.raises(RuntimeError):
        source.start(MagicMock())


@pytest.mark.asyncio
async def test_cannot_start_twice():
    source = AsyncioTickSource(interval=0.01)
    source.start(MagicMock())
    with pytest.raises(RuntimeError):
        source.start(MagicMock())
    source.cancel()


def test_start_outside_event_loop_fails():
    source = AsyncioTickSource()
    with pytest.raises(RuntimeError):
        source.start(MagicMock())
    assert not source.active


@pytest.mark.asyncio
async def test_timer_completes_focus_on_real_loop(sink):
    record = FocusSession(id=1, duration_minutes=1, session_type="focus")
    log_session = AsyncMock(return_value=Ok(record))
    notifier = SessionNotifier(log_session, sink)
    timer = FocusTimer(
        DurationSettings(focus_minutes=1),
        notifier=notifier,
        sink=sink,
        tick_source_factory=lambda: AsyncioTickSource(interval=0.001),
    )

    with timer:
        timer.start()
        for _ in range(400):
            if timer.mode != TimerMode.FOCUS:
                break
            await asyncio.sleep(0.005)

    await notifier.drain()

    assert timer.mode == TimerMode.SHORT_BREAK
    assert timer.completed_focus_count == 1
    log_session.assert_awaited_once_with(1, "focus", None)
    assert sink.of_kind("success") == [SUCCESS_MESSAGE]
