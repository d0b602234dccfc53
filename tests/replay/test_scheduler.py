"""ManualScheduler and AsyncioScheduler."""

from __future__ import annotations

import asyncio

from trackmap.replay.scheduler import AsyncioScheduler, ManualScheduler


def test_manual_fires_in_due_order():
    sched = ManualScheduler()
    fired: list[str] = []
    sched.after(200, lambda: fired.append("b"))
    sched.after(100, lambda: fired.append("a"))
    sched.advance(150)
    assert fired == ["a"]
    sched.advance(50)
    assert fired == ["a", "b"]
    assert sched.now_ms == 200


def test_manual_cancel():
    sched = ManualScheduler()
    fired: list[int] = []
    handle = sched.after(10, lambda: fired.append(1))
    sched.after_cancel(handle)
    sched.after_cancel(handle)
    sched.advance(100)
    assert fired == []
    assert sched.pending() == 0


def test_manual_rescheduling_inside_callback():
    sched = ManualScheduler()
    fired: list[int] = []

    def _tick() -> None:
        fired.append(sched.now_ms)
        sched.after(100, _tick)

    sched.after(100, _tick)
    sched.advance(350)
    assert fired == [100, 200, 300]
    assert sched.pending() == 1


def test_asyncio_scheduler_fires_callback():
    async def _main() -> list[int]:
        fired: list[int] = []
        sched = AsyncioScheduler(asyncio.get_running_loop())
        sched.after(10, lambda: fired.append(1))
        await asyncio.sleep(0.1)
        return fired

    assert asyncio.run(_main()) == [1]


def test_asyncio_scheduler_cancel():
    async def _main() -> list[int]:
        fired: list[int] = []
        sched = AsyncioScheduler(asyncio.get_running_loop())
        handle = sched.after(10, lambda: fired.append(1))
        sched.after_cancel(handle)
        await asyncio.sleep(0.1)
        return fired

    assert asyncio.run(_main()) == []
