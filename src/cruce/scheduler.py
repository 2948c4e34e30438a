"""
Deferred single-shot actions on a single-threaded timeline.

The game never runs a bot turn inline with the change that triggered it; it
hands a callback to a ``Scheduler`` instead. ``ManualScheduler`` keeps a
virtual clock (tests, simulations); ``AsyncioScheduler`` rides an event loop.
"""
from __future__ import annotations

import asyncio
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, Protocol

Callback = Callable[[], None]


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run ``callback`` once, ``delay`` seconds from now."""

    def call_later(self, delay: float, callback: Callback) -> Handle: ...


@dataclass(order=True)
class _Timer:
    due: float
    seq: int
    callback: Callback = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Virtual-time scheduler. Nothing runs until ``advance`` or
    ``run_until_idle`` is called; timers fire in (due time, insertion) order.
    """

    def __init__(self) -> None:
        self.now: float = 0.0
        self._timers: list[_Timer] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callback) -> _Timer:
        timer = _Timer(self.now + max(0.0, delay), next(self._seq), callback)
        heapq.heappush(self._timers, timer)
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for t in self._timers if not t.cancelled)

    def run_next(self) -> bool:
        """Run the earliest pending timer. Returns False when none is left."""
        while self._timers:
            timer = heapq.heappop(self._timers)
            if timer.cancelled:
                continue
            self.now = max(self.now, timer.due)
            timer.callback()
            return True
        return False

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running every timer that comes due. Returns timers run."""
        deadline = self.now + seconds
        ran = 0
        while self._timers and self._timers[0].due <= deadline:
            timer = heapq.heappop(self._timers)
            if timer.cancelled:
                continue
            self.now = timer.due
            timer.callback()
            ran += 1
        self.now = deadline
        return ran

    def run_until_idle(self, max_steps: int = 100_000) -> int:
        """Run timers (including ones they schedule) until none remain."""
        ran = 0
        while self.run_next():
            ran += 1
            if ran >= max_steps:
                raise RuntimeError(f"Scheduler still busy after {max_steps} timers")
        return ran


class AsyncioScheduler:
    """Scheduler backed by ``loop.call_later`` on the running event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callback) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)
