"""
Defines the abstract interfaces for the external collaborators of the
sampling pipeline.

This module provides:
- ContainerRuntime: lists containers and reports their launch command and
  host PID (implemented by DockerCliRuntime).
- SocketInspector: lists the listening sockets inside a process's network
  namespace (implemented by NsenterSocketInspector).

Keeping the shell-outs behind these interfaces lets the pipeline be tested
with in-memory fakes.
"""

from abc import ABC, abstractmethod
from typing import Any, List


class ContainerRuntime(ABC):
    """
    Abstract base class for container runtime queries.

    All methods are synchronous request/response calls. Implementations
    translate runtime failures into the pipeline's error types.
    """

    @abstractmethod
    def list_container_ids(self) -> List[str]:
        """
        Return the identifiers of all running containers.

        Raises:
            DiscoveryError: If the runtime cannot be queried.
        """

    @abstractmethod
    def get_launch_command(self, container_id: str) -> Any:
        """
        Return the configured launch command of a container as a parsed value.

        Normally a list of strings, but may be None or any other JSON value
        when the container has no command configured.

        Raises:
            ClassificationError: If the inspection fails or its output cannot
                be parsed.
        """

    @abstractmethod
    def get_host_pid(self, container_id: str) -> int:
        """
        Return the host-visible PID of the container's main process.

        Raises:
            ContainerProcessLookupError: If the PID cannot be resolved to a
                live process.
        """


class SocketInspector(ABC):
    """Abstract base class for namespace-scoped socket listing."""

    @abstractmethod
    def list_listening_sockets(self, pid: int) -> str:
        """
        Return the raw listening-socket listing of ``pid``'s network namespace.

        The listing has one socket per line, whitespace-delimited columns and
        no header.

        Raises:
            SocketListingError: If the namespace cannot be entered or the
                listing command fails.
        """
