"""
Listen queue sampling for a single container.
"""

import logging

from ..exceptions import SocketListingError
from ..models.samples import QueueSample
from ..runtime.base import ContainerRuntime, SocketInspector
from ..runtime.sockets import parse_listen_queue

logger = logging.getLogger(__name__)


class QueueSampler:
    """
    Reads the listen queue length of the workload socket in one container.

    The sampler resolves the container's host PID, lists the listening
    sockets inside that PID's network namespace and parses the queue length
    of ``socket_path`` from the listing.
    """

    def __init__(
        self,
        runtime: ContainerRuntime,
        inspector: SocketInspector,
        socket_path: str,
    ):
        """
        Args:
            runtime: Runtime used to resolve the container's host PID.
            inspector: Inspector used to list sockets in the PID's namespace.
            socket_path: Well-known path of the workload's listening socket.
        """
        self.runtime = runtime
        self.inspector = inspector
        self.socket_path = socket_path

    def sample(self, container_id: str) -> int:
        """
        Return the listen queue length of ``container_id``'s workload socket.

        A failed socket listing degrades to 0 with a warning. A listing
        without the socket, or with an unparseable queue field, is also 0.

        Raises:
            ContainerProcessLookupError: If the container's host PID cannot
                be resolved.
        """
        return self.measure(container_id).queue_length

    def measure(self, container_id: str) -> QueueSample:
        """
        Sample ``container_id`` and return a matched QueueSample.

        When the socket listing fails the sample has a zero queue length and
        ``error_info`` holds the cause.

        Raises:
            ContainerProcessLookupError: If the container's host PID cannot
                be resolved.
        """
        pid = self.runtime.get_host_pid(container_id)

        try:
            listing = self.inspector.list_listening_sockets(pid)
        except SocketListingError as e:
            logger.warning(f"Socket listing failed for container {container_id}: {e}")
            return QueueSample(container_id=container_id, matched=True, error_info=str(e))

        queue_length = parse_listen_queue(listing, self.socket_path)
        logger.debug(
            f"Container {container_id} (PID {pid}) queue length on "
            f"{self.socket_path}: {queue_length}"
        )
        return QueueSample(container_id=container_id, queue_length=queue_length, matched=True)
