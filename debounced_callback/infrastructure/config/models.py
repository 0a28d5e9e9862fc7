"""
Configuration models and data structures.

This module defines the configuration models used by the application,
providing type safety and validation for configuration values.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ...core.domain.options import DebounceConfig

VALID_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    log_directory: str = "logs"
    max_file_size: str = "10 MB"
    backup_count: int = 5
    console_enabled: bool = True
    file_enabled: bool = False
    intercept_stdlib: bool = True


@dataclass
class ApplicationConfig:
    """Main application configuration."""

    name: str = "Debounced Callback"
    version: str = "0.1.0"
    debug: bool = False
    environment: str = "production"

    debounce: DebounceConfig = field(default_factory=DebounceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    config_file_path: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate_logging()

    def _validate_logging(self) -> None:
        """Validate logging settings."""
        level = self.logging.level.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Log level must be one of {', '.join(VALID_LOG_LEVELS)}, got {self.logging.level}")
        self.logging.level = level

        if self.logging.backup_count < 0:
            raise ValueError(
                f"Log backup count must not be negative, got {self.logging.backup_count}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'name': self.name,
            'version': self.version,
            'debug': self.debug,
            'environment': self.environment,
            'debounce': self.debounce.to_dict(),
            'logging': dict(self.logging.__dict__),
            'config_file_path': self.config_file_path
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ApplicationConfig':
        """Create configuration from dictionary."""
        debounce_config = DebounceConfig.from_dict(data.get('debounce') or {})
        logging_config = LoggingConfig(**(data.get('logging') or {}))

        return cls(
            name=data.get('name', 'Debounced Callback'),
            version=data.get('version', '0.1.0'),
            debug=data.get('debug', False),
            environment=data.get('environment', 'production'),
            debounce=debounce_config,
            logging=logging_config,
            config_file_path=data.get('config_file_path')
        )
