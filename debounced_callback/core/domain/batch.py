"""
Pending batch domain models.

A batch is the coalescing window that collects calls until the debouncer
executes, cancels or otherwise settles them. Every call contributes one
waiter; every waiter is settled exactly once.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..interfaces.scheduling import ICancelToken


@dataclass(frozen=True)
class CallArguments:
    """Snapshot of the arguments of one call."""

    args: Tuple[Any, ...] = ()
    kwargs: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        parts = [repr(a) for a in self.args]
        parts.extend(f"{k}={v!r}" for k, v in self.kwargs.items())
        return f"({', '.join(parts)})"


class Waiter:
    """Settlement handle bound to exactly one call."""

    __slots__ = ("future",)

    def __init__(self, future: "asyncio.Future[Any]"):
        self.future = future

    @property
    def settled(self) -> bool:
        return self.future.done()

    def resolve(self, value: Any) -> bool:
        """Resolve the future. Returns False if it was already settled."""
        if self.future.done():
            return False
        self.future.set_result(value)
        return True

    def reject(self, error: BaseException) -> bool:
        """
        Reject the future. Returns False if it was already settled.

        Futures cannot carry StopIteration, so it is wrapped in a
        RuntimeError the way asyncio tasks do. CancelledError cancels the
        future instead.
        """
        if self.future.done():
            return False
        if isinstance(error, asyncio.CancelledError):
            return self.future.cancel(str(error) or None)
        if isinstance(error, StopIteration):
            wrapped = RuntimeError(f"Debounced operation raised StopIteration: {error}")
            wrapped.__cause__ = error
            error = wrapped
        self.future.set_exception(error)
        return True

    def cancel(self, msg: Optional[str] = None) -> bool:
        """Cancel the future. Returns False if it was already settled."""
        if self.future.done():
            return False
        return self.future.cancel(msg)


@dataclass
class PendingBatch:
    """
    The current coalescing window.

    ``waiters`` is non-empty exactly when ``timer_handle`` is active.
    """

    epoch: int
    args: Optional[CallArguments] = None
    waiters: List[Waiter] = field(default_factory=list)
    timer_handle: Optional[ICancelToken] = None
    max_wait_timer_handle: Optional[ICancelToken] = None
    window_opened_at: Optional[float] = None

    @property
    def scheduled(self) -> bool:
        """Whether the batch is waiting on its delay timer."""
        return bool(self.waiters) and self.timer_handle is not None

    def cancel_timers(self) -> None:
        """Cancel both timers, leaving args and waiters in place."""
        if self.timer_handle is not None:
            self.timer_handle.cancel()
            self.timer_handle = None
        if self.max_wait_timer_handle is not None:
            self.max_wait_timer_handle.cancel()
            self.max_wait_timer_handle = None

    def drain(self) -> List[Waiter]:
        """Detach and return all waiters."""
        waiters, self.waiters = self.waiters, []
        return waiters
