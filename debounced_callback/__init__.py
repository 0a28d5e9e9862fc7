"""
Debounced Callback - trailing-edge debouncing with a future per call.

Bursts of calls are coalesced into a single execution of an operation and
every caller gets an asyncio future that settles with the shared outcome.
Pending calls can be cancelled, flushed or settled manually, and disposal
guarantees that no caller's future is left unsettled.
"""

__version__ = "0.1.0"

# Public API exports
from .core.domain.errors import CancelError, DebounceError, DisposedError, ErrorCode
from .core.domain.options import DebounceConfig
from .core.interfaces.debouncing import IDebouncer
from .core.interfaces.scheduling import ICancelToken, IScheduler
from .core.services.debouncer import Debouncer
from .infrastructure.scheduling import AsyncioScheduler, ManualScheduler
from .application.factory import create, debounced

__all__ = [
    "CancelError",
    "DebounceError",
    "DisposedError",
    "ErrorCode",
    "DebounceConfig",
    "IDebouncer",
    "ICancelToken",
    "IScheduler",
    "Debouncer",
    "AsyncioScheduler",
    "ManualScheduler",
    "create",
    "debounced",
]
