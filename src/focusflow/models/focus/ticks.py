"""Periodic tick sources that drive the focus timer countdown."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol

TickCallback = Callable[[], None]


class TickSource(Protocol):
    """A cancellable periodic callback."""

    @property
    def active(self) -> bool: ...

    def start(self, callback: TickCallback) -> None: ...

    def cancel(self) -> None: ...


class AsyncioTickSource:
    """Fires a callback every *interval* seconds on the running event loop.

    A source is single-use: once cancelled it never fires again, even if a
    callback was already queued on the loop.
    """

    def __init__(self, interval: float = 1.0, loop: asyncio.AbstractEventLoop | None = None):
        self.interval = interval
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._callback: TickCallback | None = None
        self._cancelled = False

    @property
    def active(self) -> bool:
        return self._callback is not None and not self._cancelled

    def start(self, callback: TickCallback) -> None:
        if self._cancelled:
            raise RuntimeError("Tick source was cancelled and cannot be restarted")
        if self._callback is not None:
            raise RuntimeError("Tick source already started")
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._callback = callback
        self._schedule()

    def _schedule(self) -> None:
        assert self._loop is not None
        self._handle = self._loop.call_later(self.interval, self._fire)

    def _fire(self) -> None:
        if not self.active:
            return
        # Re-arm first so the callback may cancel this source
        self._schedule()
        assert self._callback is not None
        self._callback()

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
