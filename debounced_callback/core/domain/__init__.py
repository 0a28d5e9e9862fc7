"""
Domain models for debounced calls.

Pure data structures and errors, free of scheduling and logging concerns.
"""

from .batch import CallArguments, PendingBatch, Waiter
from .errors import CancelError, DebounceError, DisposedError, ErrorCode
from .options import DebounceConfig

__all__ = [
    "CallArguments",
    "PendingBatch",
    "Waiter",
    "CancelError",
    "DebounceError",
    "DisposedError",
    "ErrorCode",
    "DebounceConfig",
]
