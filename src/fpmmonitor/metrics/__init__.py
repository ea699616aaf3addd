"""
Metric emission for the fpmmonitor package.

- MetricsSink: the narrow "emit one value" interface
- CloudWatchSink: AWS CloudWatch via boto3
- DryRunSink: logs instead of emitting
- parse_dimensions: ``key=value`` dimension parsing
"""

from .base import DryRunSink, MetricsSink
from .dimensions import parse_dimension, parse_dimensions
from .factory import create_sink

__all__ = [
    "DryRunSink",
    "MetricsSink",
    "create_sink",
    "parse_dimension",
    "parse_dimensions",
]
