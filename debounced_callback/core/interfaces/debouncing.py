"""
Debouncer interface.

Defines the public contract of a trailing-edge debouncer that hands every
caller a future for the coalesced result.
"""

import asyncio
from abc import abstractmethod
from typing import Any, Callable, Optional, Union

from .lifecycle import IComponent


class IDebouncer(IComponent):
    """Interface for debounced operations."""

    @abstractmethod
    def __call__(self, *args: Any, **kwargs: Any) -> "asyncio.Future[Any]":
        """
        Register a call and return a future for the batch outcome.

        Only the arguments of the latest call in a window are executed.
        """
        pass

    @abstractmethod
    def cancel(self, reason: Optional[Union[str, BaseException]] = None) -> None:
        """Reject every pending call with a cancellation error."""
        pass

    @abstractmethod
    def flush(self) -> None:
        """Execute the pending batch now, if there is one."""
        pass

    @abstractmethod
    def is_pending(self) -> bool:
        """Whether a batch is currently scheduled."""
        pass

    @abstractmethod
    def settle_pending_with(self, executor: Callable[[], Any]) -> "asyncio.Future[Any]":
        """
        Settle the pending batch with the outcome of ``executor``.

        The wrapped operation is not invoked.
        """
        pass
