"""
Virtual-clock timer service.

Nothing fires until the owner advances the clock, which makes timing
behaviour deterministic in tests and lets the CLI replay call traces
without sleeping.
"""

import asyncio
import heapq
from typing import Any, Callable, List, Optional, Tuple

from ...core.interfaces.scheduling import ICancelToken, IScheduler


class ManualTimer(ICancelToken):
    """Timer entry of a ManualScheduler."""

    __slots__ = ("due_ms", "callback", "_cancelled", "_fired")

    def __init__(self, due_ms: float, callback: Callable[[], Any]):
        self.due_ms = due_ms
        self.callback = callback
        self._cancelled = False
        self._fired = False

    def cancel(self) -> None:
        if not self._fired:
            self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def active(self) -> bool:
        return not (self._cancelled or self._fired)


class ManualScheduler(IScheduler):
    """
    Scheduler driven by an explicit virtual clock.

    Timers due at the same instant fire in the order they were scheduled.
    Futures are created on ``loop`` if given, otherwise on the running loop.
    """

    timer_class = ManualTimer

    def __init__(self, start_ms: float = 0.0, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._now = start_ms
        self._loop = loop
        self._queue: List[Tuple[float, int, ManualTimer]] = []
        self._sequence = 0

    def schedule(self, callback: Callable[[], Any], delay_ms: float) -> ManualTimer:
        timer = self.timer_class(self._now + max(delay_ms, 0), callback)
        self._sequence += 1
        heapq.heappush(self._queue, (timer.due_ms, self._sequence, timer))
        return timer

    def now(self) -> float:
        return self._now

    def create_future(self) -> "asyncio.Future[Any]":
        loop = self._loop or asyncio.get_running_loop()
        return loop.create_future()

    @property
    def pending_timers(self) -> int:
        """Number of timers that are neither cancelled nor fired."""
        return sum(1 for _, _, timer in self._queue if timer.active)

    def next_due(self) -> Optional[float]:
        """Virtual time of the next active timer, if any."""
        for due_ms, _, timer in sorted(self._queue):
            if timer.active:
                return due_ms
        return None

    def advance(self, delta_ms: float) -> int:
        """
        Move the clock forward, firing every timer that falls due.

        Args:
            delta_ms: Milliseconds to advance, must not be negative

        Returns:
            Number of timers fired
        """
        if delta_ms < 0:
            raise ValueError(f"Cannot move the clock backwards by {delta_ms}ms")
        return self.advance_to(self._now + delta_ms)

    def advance_to(self, target_ms: float) -> int:
        """Move the clock to ``target_ms``, firing every timer due by then."""
        if target_ms < self._now:
            raise ValueError(f"Cannot move the clock back from {self._now} to {target_ms}")

        fired = 0
        while self._queue and self._queue[0][0] <= target_ms:
            due_ms, _, timer = heapq.heappop(self._queue)
            if not timer.active:
                continue
            self._now = due_ms
            timer._fired = True
            fired += 1
            timer.callback()

        self._now = target_ms
        return fired

    def run_all(self, max_timers: int = 10000) -> int:
        """Fire timers until none remain; returns the number fired."""
        fired = 0
        while True:
            due_ms = self.next_due()
            if due_ms is None:
                return fired
            if fired >= max_timers:
                raise RuntimeError(f"Timers still pending after firing {max_timers}")
            fired += self.advance_to(due_ms)
