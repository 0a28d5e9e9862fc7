"""
Debounce timing configuration.
"""

from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class DebounceConfig:
    """Timing of a debounce window, in milliseconds."""

    delay_ms: float = 0.0
    """Trailing quiet period after the latest call."""

    max_wait_ms: Optional[float] = None
    """Ceiling from the first call of a window to forced execution."""

    def __post_init__(self) -> None:
        """Validate timing values."""
        if isinstance(self.delay_ms, bool) or not isinstance(self.delay_ms, Real):
            raise ValueError(f"delay_ms must be a number, got {self.delay_ms!r}")
        if self.delay_ms < 0:
            raise ValueError(f"delay_ms must not be negative, got {self.delay_ms}")

        if self.max_wait_ms is not None:
            if isinstance(self.max_wait_ms, bool) or not isinstance(self.max_wait_ms, Real):
                raise ValueError(f"max_wait_ms must be a number, got {self.max_wait_ms!r}")
            if self.max_wait_ms <= 0:
                raise ValueError(f"max_wait_ms must be positive, got {self.max_wait_ms}")

    def to_dict(self) -> Dict[str, Any]:
        return {'delay_ms': self.delay_ms, 'max_wait_ms': self.max_wait_ms}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DebounceConfig':
        return cls(
            delay_ms=data.get('delay_ms', 0.0),
            max_wait_ms=data.get('max_wait_ms')
        )
