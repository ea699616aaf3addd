"""
External collaborator interfaces and their production adapters.

- ContainerRuntime / DockerCliRuntime: container listing and inspection
- SocketInspector / NsenterSocketInspector: namespace-scoped socket listing
- parse_listen_queue: pure parser for the socket listing text
"""

from .base import ContainerRuntime, SocketInspector
from .docker import DockerCliRuntime
from .sockets import NsenterSocketInspector, parse_listen_queue

__all__ = [
    "ContainerRuntime",
    "SocketInspector",
    "DockerCliRuntime",
    "NsenterSocketInspector",
    "parse_listen_queue",
]
