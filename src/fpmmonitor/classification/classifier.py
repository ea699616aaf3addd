"""
Container workload classification.

This module decides whether a container runs the monitored workload by
looking for an exact marker token in its configured launch command.
"""

import logging
from typing import Any

from ..exceptions import ClassificationError
from ..runtime.base import ContainerRuntime

logger = logging.getLogger(__name__)


def command_has_marker(command: Any, marker: str) -> bool:
    """Check whether a launch command contains ``marker`` as a whole token.

    Only exact token equality counts; a token such as ``php-fpm-worker`` or
    ``/usr/sbin/php-fpm`` does not match the marker ``php-fpm``. Non-string
    tokens are ignored and anything other than a list is treated as no match.

    Args:
        command: Parsed launch command, normally a list of strings.
        marker: Token identifying the monitored workload.

    Returns:
        True if one of the tokens equals the marker.

    Examples:
        >>> command_has_marker(["php-fpm", "-F"], "php-fpm")
        True
        >>> command_has_marker(["php-fpm-worker"], "php-fpm")
        False
        >>> command_has_marker(None, "php-fpm")
        False
    """
    if not isinstance(command, list):
        return False
    return any(isinstance(token, str) and token == marker for token in command)


def is_monitored_workload(runtime: ContainerRuntime, container_id: str, marker: str) -> bool:
    """Classify one container.

    Inspection failures never propagate: they are logged as warnings and the
    container is excluded from the sample.

    Args:
        runtime: Container runtime used for the inspection.
        container_id: Container to classify.
        marker: Token identifying the monitored workload.

    Returns:
        True if the container's launch command contains the marker token.
    """
    try:
        command = runtime.get_launch_command(container_id)
    except ClassificationError as e:
        logger.warning(f"Failed to inspect container {container_id}: {e}")
        return False

    matched = command_has_marker(command, marker)
    logger.debug(f"Container {container_id} command {command!r} matched={matched}")
    return matched
