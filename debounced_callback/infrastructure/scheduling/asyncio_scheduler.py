"""
Event-loop backed timer service.

Timers are plain ``loop.call_later`` handles; the loop is bound lazily on
first use so a scheduler can be built before the loop is running.
"""

import asyncio
from typing import Any, Callable, Optional

from ...core.interfaces.scheduling import ICancelToken, IScheduler


class AsyncioTimer(ICancelToken):
    """Cancel token wrapping an ``asyncio.TimerHandle``."""

    __slots__ = ("_handle",)

    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    def cancelled(self) -> bool:
        return self._handle.cancelled()

    @property
    def when_ms(self) -> float:
        """Loop time at which the callback is due, in milliseconds."""
        return self._handle.when() * 1000.0


class AsyncioScheduler(IScheduler):
    """Scheduler running callbacks on an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(self, callback: Callable[[], Any], delay_ms: float) -> AsyncioTimer:
        return AsyncioTimer(self.loop.call_later(max(delay_ms, 0) / 1000.0, callback))

    def now(self) -> float:
        return self.loop.time() * 1000.0

    def create_future(self) -> "asyncio.Future[Any]":
        return self.loop.create_future()
