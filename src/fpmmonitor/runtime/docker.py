"""
Docker CLI implementation of the container runtime interface.

Each query shells out to the ``docker`` binary through run_command, so every
call inherits the configured per-command timeout.
"""

import json
import logging
from typing import Any, List, Optional

import psutil

from ..exceptions import ClassificationError, ContainerProcessLookupError, DiscoveryError
from ..system.commands import run_command
from .base import ContainerRuntime

logger = logging.getLogger(__name__)


class DockerCliRuntime(ContainerRuntime):
    """
    Container runtime backed by ``docker ps`` and ``docker inspect``.
    """

    def __init__(self, docker_binary: str = "docker", timeout: Optional[float] = None):
        """
        Args:
            docker_binary: Name or path of the docker executable.
            timeout: Per-command timeout in seconds.
        """
        self.docker_binary = docker_binary
        self.timeout = timeout

    def _docker(self, *args: str):
        return run_command([self.docker_binary, *args], timeout=self.timeout)

    def list_container_ids(self) -> List[str]:
        returncode, stdout, stderr = self._docker("ps", "-q")
        if returncode != 0:
            raise DiscoveryError(
                f"docker ps -q failed with status {returncode}: {stderr.strip()}"
            )

        container_ids = [line.strip() for line in stdout.splitlines() if line.strip()]
        logger.debug(f"Found {len(container_ids)} running containers")
        return container_ids

    def get_launch_command(self, container_id: str) -> Any:
        returncode, stdout, stderr = self._docker(
            "inspect", container_id, "--format", "{{json .Config.Cmd}}"
        )
        if returncode != 0:
            raise ClassificationError(
                f"docker inspect failed with status {returncode}: {stderr.strip()}",
                container_id=container_id,
            )

        try:
            return json.loads(stdout.strip())
        except json.JSONDecodeError as e:
            raise ClassificationError(
                f"Failed to parse docker inspect output as JSON: {e}",
                container_id=container_id,
            ) from e

    def get_host_pid(self, container_id: str) -> int:
        returncode, stdout, stderr = self._docker(
            "inspect", "-f", "{{.State.Pid}}", container_id
        )
        if returncode != 0:
            raise ContainerProcessLookupError(
                f"Failed to get PID for container {container_id}: {stderr.strip()}",
                container_id=container_id,
            )

        try:
            pid = int(stdout.strip())
        except ValueError as e:
            raise ContainerProcessLookupError(
                f"Failed to parse PID '{stdout.strip()}' for container {container_id}",
                container_id=container_id,
            ) from e

        # Docker reports PID 0 for containers that are no longer running.
        if pid <= 0:
            raise ContainerProcessLookupError(
                f"Container {container_id} has no running main process",
                container_id=container_id,
            )
        if not psutil.pid_exists(pid):
            raise ContainerProcessLookupError(
                f"PID {pid} of container {container_id} is not in the host process table",
                container_id=container_id,
            )

        return pid
