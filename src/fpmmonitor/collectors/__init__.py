"""
Sampling pipeline for the fpmmonitor package.

- list_running_containers: container enumeration
- QueueSampler: per-container listen queue extraction
- SampleAggregator: one full tick across all containers
"""

from .aggregator import SampleAggregator
from .enumerator import list_running_containers
from .queue_sampler import QueueSampler

__all__ = [
    "SampleAggregator",
    "QueueSampler",
    "list_running_containers",
]
