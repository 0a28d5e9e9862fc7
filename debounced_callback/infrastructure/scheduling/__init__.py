"""
Timer services implementing the core scheduling interface.
"""

from .asyncio_scheduler import AsyncioScheduler, AsyncioTimer
from .manual import ManualScheduler, ManualTimer

__all__ = [
    "AsyncioScheduler",
    "AsyncioTimer",
    "ManualScheduler",
    "ManualTimer",
]
