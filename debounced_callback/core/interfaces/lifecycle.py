"""
Lifecycle interfaces for components owned by a host.

The host creates a component, may reconfigure it while it lives and must
dispose it exactly once when its owning context ends.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class IDisposable(ABC):
    """Interface for components with a one-shot teardown."""

    @abstractmethod
    def dispose(self) -> None:
        """
        Tear the component down.

        Disposal is terminal: a disposed component is never reused and
        repeated calls are no-ops.
        """
        pass

    @property
    @abstractmethod
    def disposed(self) -> bool:
        """Whether dispose() has been called."""
        pass


class IHealthCheckable(ABC):
    """Interface for components that can report their health status."""

    @abstractmethod
    async def check_health(self) -> Dict[str, Any]:
        """
        Check the health status of the component.

        Returns:
            Dict containing health information with at least:
            - 'healthy': bool indicating if component is healthy
            - 'status': str describing current status
            - 'details': Dict with additional health details
        """
        pass


class IConfigurable(ABC):
    """Interface for components that can be reconfigured while alive."""

    @abstractmethod
    def configure(self, config: Any) -> None:
        """
        Apply a new configuration.

        Raises:
            ValueError: If configuration is invalid
        """
        pass


class IComponent(IDisposable, IHealthCheckable, IConfigurable):
    """Base interface combining the lifecycle contracts."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the component name."""
        pass
