"""
Timer service interfaces.

The debouncer never talks to a clock directly. It asks a scheduler to run a
callback after a delay and keeps the returned token so the timer can be
cancelled.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable


class ICancelToken(ABC):
    """Handle for a scheduled callback."""

    @abstractmethod
    def cancel(self) -> None:
        """
        Cancel the scheduled callback.

        Cancelling a callback that already ran or was already cancelled
        must be a no-op.
        """
        pass

    @abstractmethod
    def cancelled(self) -> bool:
        """Return True if the callback was cancelled."""
        pass


class IScheduler(ABC):
    """Interface for timer services used by the debouncer."""

    @abstractmethod
    def schedule(self, callback: Callable[[], Any], delay_ms: float) -> ICancelToken:
        """
        Run ``callback`` once after ``delay_ms`` milliseconds.

        Args:
            callback: Zero-argument callable to run
            delay_ms: Delay in milliseconds

        Returns:
            Token that cancels the pending callback
        """
        pass

    @abstractmethod
    def now(self) -> float:
        """Current scheduler time in milliseconds."""
        pass

    @abstractmethod
    def create_future(self) -> "asyncio.Future[Any]":
        """Create a future bound to the scheduler's event loop."""
        pass
