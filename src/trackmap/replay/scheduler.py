"""Single-threaded timers with the ``after`` / ``after_cancel`` pair.

Any object exposing ``after(ms, callback) -> handle`` and
``after_cancel(handle)`` can drive :class:`~trackmap.replay.engine.TrackReplayEngine`
— including a ``tkinter.Tk`` root.
"""

from __future__ import annotations

import asyncio
import itertools


class ManualScheduler:
    """Virtual-clock scheduler advanced explicitly with :meth:`advance`.

    Callbacks run synchronously inside :meth:`advance`, in due-time order
    (ties in scheduling order).  Used for headless runs and tests.
    """

    def __init__(self) -> None:
        self.now_ms = 0
        self._timers: dict[int, tuple[int, object]] = {}
        self._ids = itertools.count(1)

    def after(self, ms: int, callback) -> int:
        handle = next(self._ids)
        self._timers[handle] = (self.now_ms + ms, callback)
        return handle

    def after_cancel(self, handle: int) -> None:
        self._timers.pop(handle, None)

    def pending(self) -> int:
        """Return the number of scheduled, not yet fired timers."""
        return len(self._timers)

    def advance(self, ms: int) -> None:
        """Move the clock forward *ms* and fire every timer that falls due."""
        target = self.now_ms + ms
        while True:
            due = [(when, handle) for handle, (when, _) in self._timers.items() if when <= target]
            if not due:
                break
            when, handle = min(due)
            _, callback = self._timers.pop(handle)
            self.now_ms = when
            callback()
        self.now_ms = target


class AsyncioScheduler:
    """Schedules callbacks on an asyncio event loop via ``call_later``."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop

    def after(self, ms: int, callback) -> asyncio.TimerHandle:
        return self._loop.call_later(ms / 1000.0, callback)

    def after_cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()
