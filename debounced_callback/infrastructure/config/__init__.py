"""
Configuration management for the application.

This module provides configuration loading and the configuration models.
"""

from .loader import ConfigLoader
from .models import ApplicationConfig, DebounceConfig, LoggingConfig

__all__ = [
    "ConfigLoader",
    "ApplicationConfig",
    "DebounceConfig",
    "LoggingConfig",
]
