"""
Metrics sink factory.
"""

import logging

from ..models.config import AgentConfig
from .base import DryRunSink, MetricsSink
from .dimensions import parse_dimensions

logger = logging.getLogger(__name__)


def create_sink(config: AgentConfig) -> MetricsSink:
    """
    Create the metrics sink selected by the configuration.

    Dimensions are parsed here, once; malformed entries are logged and dropped.

    Returns:
        DryRunSink when ``config.dry_run`` is set, otherwise CloudWatchSink.
    """
    dimensions = parse_dimensions(config.dimensions)

    if config.dry_run:
        logger.info("Dry run enabled, metrics will be logged instead of sent")
        return DryRunSink(config.namespace, config.metric_name, dimensions)

    from .cloudwatch import CloudWatchSink

    return CloudWatchSink(
        namespace=config.namespace,
        metric_name=config.metric_name,
        dimensions=dimensions,
        region=config.region,
    )
