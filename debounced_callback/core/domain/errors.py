"""
Error taxonomy for debounced calls.

Lifecycle errors raised by the debouncer itself are kept distinct from the
errors of the wrapped operation, so callers can tell "my call was debounced
away" apart from "the operation itself failed".
"""

from enum import Enum
from typing import Any, Optional


class ErrorCode(Enum):
    """Machine-readable error codes."""
    UNKNOWN_ERROR = 20000
    CANCELLED = 20001
    DISPOSED = 20002
    CONFIGURATION_CHANGED = 20003
    MISSING_ARGUMENTS = 20004


class DebounceError(Exception):
    """Base class for errors synthesized by the debouncer."""

    default_message = "Debounced call failed"

    def __init__(
        self,
        message: Optional[str] = None,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Any] = None
    ):
        self.message = message or self.default_message
        self.code = code
        self.details = details
        super().__init__(self.message)


class CancelError(DebounceError):
    """A pending call was cancelled before it could execute."""

    default_message = "Debounced call cancelled"

    def __init__(
        self,
        reason: Optional[str] = None,
        code: ErrorCode = ErrorCode.CANCELLED,
        details: Optional[Any] = None
    ):
        super().__init__(reason, code, details)

    @property
    def reason(self) -> str:
        """Human readable cancellation reason."""
        return self.message


class DisposedError(DebounceError):
    """The debouncer was disposed before the call could settle."""

    default_message = "Debouncer disposed, debounced call cancelled"

    def __init__(self, message: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, ErrorCode.DISPOSED, details)
