"""
Metrics sink interface and the dry-run sink.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


class MetricsSink(ABC):
    """
    Abstract destination for the per-tick measurement.

    A sink receives one value per emit() call. Its own transport, retries and
    authentication are opaque to the reporting loop.
    """

    def __init__(
        self,
        namespace: str,
        metric_name: str,
        dimensions: Optional[List[Tuple[str, str]]] = None,
    ):
        self.namespace = namespace
        self.metric_name = metric_name
        self.dimensions = list(dimensions or [])

    @abstractmethod
    def emit(self, value: int) -> None:
        """
        Submit one measurement.

        Raises:
            MetricEmissionError: If the measurement could not be delivered.
        """


class DryRunSink(MetricsSink):
    """Logs the measurement instead of submitting it."""

    def emit(self, value: int) -> None:
        logger.info(
            f"Would send metric {self.metric_name}={value} to namespace "
            f"{self.namespace} with dimensions {self.dimensions}"
        )
