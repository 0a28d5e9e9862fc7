"""
Core module containing the debouncing logic, domain models and interfaces.

Everything here is independent of the concrete clock, configuration files
and logging output, which live in the infrastructure layer.
"""

from .interfaces.debouncing import IDebouncer
from .interfaces.lifecycle import IComponent, IDisposable, IHealthCheckable
from .interfaces.scheduling import ICancelToken, IScheduler
from .domain.errors import CancelError, DebounceError, DisposedError, ErrorCode
from .domain.options import DebounceConfig
from .services.debouncer import Debouncer

__all__ = [
    "IDebouncer",
    "IComponent",
    "IDisposable",
    "IHealthCheckable",
    "ICancelToken",
    "IScheduler",
    "CancelError",
    "DebounceError",
    "DisposedError",
    "ErrorCode",
    "DebounceConfig",
    "Debouncer",
]
