"""
Error taxonomy for the sampling pipeline and reporting loop.

Every error raised by the pipeline derives from MonitorError so callers at the
tick boundary can tell data-collection failures apart from programming errors.

Propagation rules:
- DiscoveryError aborts the current tick only.
- ClassificationError, ContainerProcessLookupError and SocketListingError are
  contained at the container boundary and become a zero contribution.
- MetricEmissionError surfaces to the tick and is logged; the next tick resends.
"""

from typing import Optional


class MonitorError(Exception):
    """Base class for all fpmmonitor runtime errors."""


class DiscoveryError(MonitorError):
    """Raised when the running containers cannot be listed."""


class ContainerError(MonitorError):
    """Base class for failures scoped to a single container."""

    def __init__(self, message: str, container_id: Optional[str] = None):
        super().__init__(message)
        self.container_id = container_id


class ClassificationError(ContainerError):
    """Raised when a container's launch command cannot be inspected or parsed."""


class ContainerProcessLookupError(ContainerError):
    """Raised when the host PID of a container's main process cannot be resolved."""


class SocketListingError(MonitorError):
    """Raised when the listening sockets inside a namespace cannot be listed."""

    def __init__(self, message: str, pid: Optional[int] = None):
        super().__init__(message)
        self.pid = pid


class MetricEmissionError(MonitorError):
    """Raised when a measurement cannot be delivered to the metrics backend."""
