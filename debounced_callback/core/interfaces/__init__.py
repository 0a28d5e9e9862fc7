"""
Core interfaces defining the contracts of the debouncer and its collaborators.
"""

from .debouncing import IDebouncer
from .lifecycle import IComponent, IConfigurable, IDisposable, IHealthCheckable
from .scheduling import ICancelToken, IScheduler

__all__ = [
    "IDebouncer",
    "IComponent",
    "IConfigurable",
    "IDisposable",
    "IHealthCheckable",
    "ICancelToken",
    "IScheduler",
]
