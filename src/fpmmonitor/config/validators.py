"""
Configuration validation utilities.

Turns raw TOML sections (and CLI overrides merged into them) into a
validated AgentConfig.
"""

import logging
from typing import Any, Dict

from ..models.config import (
    AgentConfig,
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_INTERVAL_SECONDS,
    DEFAULT_MARKER,
    DEFAULT_MAX_WORKERS,
    DEFAULT_METRIC_NAME,
    DEFAULT_NAMESPACE,
    DEFAULT_SOCKET_PATH,
)
from ..validation import (
    ValidationError,
    validate_non_empty_string,
    validate_positive_float,
    validate_positive_integer,
    validate_string_list,
)

logger = logging.getLogger(__name__)


def _validate_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a boolean",
            field_name=field_name,
            value=value,
        )
    return value


def validate_agent_config(config_data: Dict[str, Any]) -> AgentConfig:
    """
    Validate and create an AgentConfig from raw configuration data.

    Args:
        config_data: Parsed TOML document with optional ``agent``,
            ``metrics`` and ``sampling`` tables

    Returns:
        Validated AgentConfig instance

    Raises:
        ValidationError: If validation fails
    """
    agent_settings = config_data.get("agent", {})
    metrics_settings = config_data.get("metrics", {})
    sampling_settings = config_data.get("sampling", {})

    interval_seconds = validate_positive_integer(
        agent_settings.get("interval_seconds", DEFAULT_INTERVAL_SECONDS),
        min_value=1,
        max_value=3600,
        field_name="agent.interval_seconds",
    )
    dry_run = _validate_bool(agent_settings.get("dry_run", False), "agent.dry_run")

    namespace = validate_non_empty_string(
        metrics_settings.get("namespace", DEFAULT_NAMESPACE),
        field_name="metrics.namespace",
    )
    metric_name = validate_non_empty_string(
        metrics_settings.get("metric_name", DEFAULT_METRIC_NAME),
        field_name="metrics.metric_name",
    )
    # Individual malformed pairs are dropped later by parse_dimensions, not here.
    dimensions = validate_string_list(
        metrics_settings.get("dimensions", []),
        field_name="metrics.dimensions",
    )
    region = metrics_settings.get("region")
    if region is not None:
        region = validate_non_empty_string(region, field_name="metrics.region")

    marker = validate_non_empty_string(
        sampling_settings.get("marker", DEFAULT_MARKER),
        field_name="sampling.marker",
    )
    socket_path = validate_non_empty_string(
        sampling_settings.get("socket_path", DEFAULT_SOCKET_PATH),
        field_name="sampling.socket_path",
    )
    command_timeout = validate_positive_float(
        sampling_settings.get("command_timeout", DEFAULT_COMMAND_TIMEOUT),
        min_value=0.1,
        max_value=300.0,
        field_name="sampling.command_timeout",
    )
    max_workers = validate_positive_integer(
        sampling_settings.get("max_workers", DEFAULT_MAX_WORKERS),
        min_value=1,
        max_value=256,
        field_name="sampling.max_workers",
    )
    sudo_command = sampling_settings.get("sudo_command", "sudo")
    if not isinstance(sudo_command, str):
        raise ValidationError(
            "sampling.sudo_command must be a string",
            field_name="sampling.sudo_command",
            value=sudo_command,
        )
    docker_binary = validate_non_empty_string(
        sampling_settings.get("docker_binary", "docker"),
        field_name="sampling.docker_binary",
    )

    if command_timeout >= interval_seconds:
        logger.warning(
            f"sampling.command_timeout ({command_timeout}s) is not shorter than "
            f"agent.interval_seconds ({interval_seconds}s); slow ticks will delay the schedule"
        )

    return AgentConfig(
        interval_seconds=interval_seconds,
        dry_run=dry_run,
        namespace=namespace,
        metric_name=metric_name,
        dimensions=dimensions,
        region=region,
        marker=marker,
        socket_path=socket_path,
        command_timeout=command_timeout,
        max_workers=max_workers,
        sudo_command=sudo_command.strip(),
        docker_binary=docker_binary,
    )
