"""
Pytest configuration and shared fixtures for the fpmmonitor test suite.

This module provides common fixtures, in-memory fakes for the container
runtime and socket inspector, and configuration helpers.
"""

import sys
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fpmmonitor.exceptions import (  # noqa: E402
    ClassificationError,
    ContainerProcessLookupError,
    DiscoveryError,
    SocketListingError,
)
from fpmmonitor.runtime.base import ContainerRuntime, SocketInspector  # noqa: E402

SOCKET_PATH = "/var/run/php-fpm/www.socket"


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# ============================================================================
# Fakes
# ============================================================================


def ss_line(queue_field: Any, path: str = SOCKET_PATH) -> str:
    """Build one ``ss -lxnH`` line with ``queue_field`` in the third column."""
    return f"u_str  0  {queue_field}  {path} 123456  * 0"


class FakeRuntime(ContainerRuntime):
    """
    In-memory container runtime.

    Containers are described by ``commands`` (id -> launch command) and
    ``pids`` (id -> host PID). Ids listed in ``inspect_failures`` or
    ``pid_failures`` raise the matching pipeline error.
    """

    def __init__(
        self,
        container_ids: Optional[List[str]] = None,
        commands: Optional[Dict[str, Any]] = None,
        pids: Optional[Dict[str, int]] = None,
        inspect_failures: Optional[set] = None,
        pid_failures: Optional[set] = None,
        discovery_error: bool = False,
    ):
        self.container_ids = list(container_ids or [])
        self.commands = dict(commands or {})
        self.pids = dict(pids or {})
        self.inspect_failures = set(inspect_failures or ())
        self.pid_failures = set(pid_failures or ())
        self.discovery_error = discovery_error
        self.calls: List[tuple] = []
        self._lock = threading.Lock()

    def _record(self, *call):
        with self._lock:
            self.calls.append(call)

    def list_container_ids(self) -> List[str]:
        self._record("list")
        if self.discovery_error:
            raise DiscoveryError("docker ps -q failed with status 1")
        return list(self.container_ids)

    def get_launch_command(self, container_id: str) -> Any:
        self._record("command", container_id)
        if container_id in self.inspect_failures:
            raise ClassificationError("inspect failed", container_id=container_id)
        return self.commands.get(container_id)

    def get_host_pid(self, container_id: str) -> int:
        self._record("pid", container_id)
        if container_id in self.pid_failures or container_id not in self.pids:
            raise ContainerProcessLookupError(
                f"Failed to get PID for container {container_id}", container_id=container_id
            )
        return self.pids[container_id]


class FakeInspector(SocketInspector):
    """In-memory socket inspector keyed by PID."""

    def __init__(self, listings: Optional[Dict[int, str]] = None, failures: Optional[set] = None):
        self.listings = dict(listings or {})
        self.failures = set(failures or ())

    def list_listening_sockets(self, pid: int) -> str:
        if pid in self.failures:
            raise SocketListingError(f"nsenter ss failed for PID {pid}", pid=pid)
        return self.listings.get(pid, "")


def build_fleet(queue_lengths: Dict[str, Optional[int]], marker: str = "php-fpm"):
    """
    Build a FakeRuntime/FakeInspector pair from ``{container_id: queue}``.

    A queue of None makes the container a non-workload container.
    """
    commands, pids, listings = {}, {}, {}
    for index, (container_id, queue) in enumerate(queue_lengths.items(), start=100):
        if queue is None:
            commands[container_id] = ["nginx", "-g", "daemon off;"]
            continue
        commands[container_id] = [marker, "-F"]
        pids[container_id] = index
        listings[index] = ss_line(queue)
    runtime = FakeRuntime(list(queue_lengths), commands, pids)
    return runtime, FakeInspector(listings)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def socket_path() -> str:
    return SOCKET_PATH


@pytest.fixture
def fake_runtime_cls():
    return FakeRuntime


@pytest.fixture
def fake_inspector_cls():
    return FakeInspector


@pytest.fixture
def fleet():
    """Factory fixture returning (runtime, inspector) for a queue mapping."""
    return build_fleet


@pytest.fixture
def sample_config_data() -> Dict[str, Any]:
    """Sample config.toml contents for testing."""
    return {
        "agent": {"interval_seconds": 5, "dry_run": True},
        "metrics": {
            "namespace": "TestFpm",
            "metric_name": "ListenQueue",
            "dimensions": ["env=test", "role=web"],
            "region": "eu-west-1",
        },
        "sampling": {
            "marker": "php-fpm",
            "socket_path": SOCKET_PATH,
            "command_timeout": 2.0,
            "max_workers": 4,
            "sudo_command": "",
            "docker_binary": "docker",
        },
    }


@pytest.fixture
def config_file(tmp_path, sample_config_data):
    """Write the sample configuration to a temporary config.toml."""
    import toml

    path = tmp_path / "config.toml"
    with open(path, "w") as f:
        toml.dump(sample_config_data, f)
    return path


@pytest.fixture(autouse=True)
def reset_config_after_test():
    """Automatically reset configuration state after each test."""
    yield
    from fpmmonitor.config import reset_config

    reset_config()


@pytest.fixture
def make_ss_line():
    """Return the ss line builder."""
    return ss_line
