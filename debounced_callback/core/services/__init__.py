"""
Core service implementations.

This module contains the concrete implementations of the interfaces defined
in the core.interfaces module.
"""

from .debouncer import Debouncer

__all__ = [
    "Debouncer",
]
