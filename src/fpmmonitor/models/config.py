"""
Configuration data models.

This module contains the agent configuration loaded once at startup from
`config.toml` and command-line overrides. Nothing else outlives a tick.
"""

from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_INTERVAL_SECONDS = 10
DEFAULT_NAMESPACE = "PhpFpm"
DEFAULT_METRIC_NAME = "ListenQueue"
DEFAULT_MARKER = "php-fpm"
DEFAULT_SOCKET_PATH = "/var/run/php-fpm/www.socket"
DEFAULT_COMMAND_TIMEOUT = 10.0
DEFAULT_MAX_WORKERS = 8


@dataclass
class AgentConfig:
    """
    Configuration for the agent's global behavior, loaded from `config.toml`.
    """

    # [agent]
    interval_seconds: int = DEFAULT_INTERVAL_SECONDS
    dry_run: bool = False

    # [metrics]
    namespace: str = DEFAULT_NAMESPACE
    metric_name: str = DEFAULT_METRIC_NAME
    # Raw "key=value" strings; parsed by metrics.dimensions when the sink is built.
    dimensions: List[str] = field(default_factory=list)
    # None defers to the boto3 default region chain.
    region: Optional[str] = None

    # [sampling]
    marker: str = DEFAULT_MARKER
    socket_path: str = DEFAULT_SOCKET_PATH
    command_timeout: float = DEFAULT_COMMAND_TIMEOUT
    max_workers: int = DEFAULT_MAX_WORKERS
    # Privilege prefix for nsenter; empty string runs nsenter directly.
    sudo_command: str = "sudo"
    docker_binary: str = "docker"
