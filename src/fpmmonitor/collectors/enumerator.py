"""
Container enumeration for a sampling tick.
"""

import logging
from typing import List

from ..runtime.base import ContainerRuntime

logger = logging.getLogger(__name__)


def list_running_containers(runtime: ContainerRuntime) -> List[str]:
    """List the running containers to sample in this tick.

    Duplicate identifiers are collapsed so a container is never counted twice.
    Order is not significant.

    Raises:
        DiscoveryError: If the runtime cannot be queried. This aborts the
            tick; the reporting loop retries on the next one.
    """
    container_ids = list(dict.fromkeys(runtime.list_container_ids()))
    logger.debug(f"Enumerated {len(container_ids)} running containers")
    return container_ids
