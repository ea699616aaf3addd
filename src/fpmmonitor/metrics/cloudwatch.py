"""
AWS CloudWatch metrics sink.

Submits the listen queue as a high-resolution ``Count`` metric through
``put_metric_data``. Retries and credentials are left to boto3.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import MetricEmissionError
from .base import MetricsSink

logger = logging.getLogger(__name__)

METRIC_UNIT = "Count"
STORAGE_RESOLUTION = 1


class CloudWatchSink(MetricsSink):
    """
    Metrics sink backed by a boto3 CloudWatch client.
    """

    def __init__(
        self,
        namespace: str,
        metric_name: str,
        dimensions: Optional[List[Tuple[str, str]]] = None,
        region: Optional[str] = None,
        client: Any = None,
    ):
        """
        Args:
            namespace: CloudWatch namespace, e.g. "PhpFpm"
            metric_name: Metric name, e.g. "ListenQueue"
            dimensions: Parsed (name, value) dimension pairs
            region: AWS region; None uses the boto3 default chain
            client: Pre-built CloudWatch client, mainly for tests
        """
        super().__init__(namespace, metric_name, dimensions)
        self.region = region
        self.client = client if client is not None else boto3.client("cloudwatch", region_name=region)

    def build_datum(self, value: int) -> Dict[str, Any]:
        return {
            "MetricName": self.metric_name,
            "Dimensions": [{"Name": name, "Value": dim_value} for name, dim_value in self.dimensions],
            "Unit": METRIC_UNIT,
            "Value": float(value),
            "StorageResolution": STORAGE_RESOLUTION,
        }

    def emit(self, value: int) -> None:
        datum = self.build_datum(value)
        logger.debug(f"Prepared MetricDatum: {datum}")

        try:
            self.client.put_metric_data(Namespace=self.namespace, MetricData=[datum])
        except (BotoCoreError, ClientError) as e:
            raise MetricEmissionError(f"Failed to send metric to CloudWatch: {e}") from e

        logger.info(f"Sent metric to CloudWatch: {self.metric_name}={value}")
