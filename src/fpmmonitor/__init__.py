"""
fpmmonitor: PHP-FPM listen queue telemetry agent.

This package samples the listen queue of PHP-FPM processes running in Docker
containers on the host, sums it, and reports the total to AWS CloudWatch on a
fixed interval.

The package is organized into specialized modules:
- config: Configuration loading and validation
- models: Data structures for configuration and per-tick samples
- validation: Input validation and error handling
- system: External command execution
- runtime: Container runtime and socket inspector adapters
- classification: Workload detection by launch command
- collectors: Enumeration, per-container sampling and aggregation
- metrics: Metric sinks and dimension parsing
- monitoring: Interval scheduling and the reporting loop
- cli: Command-line interface

Usage:
    From command line:
        fpmmonitor [options]
        python -m fpmmonitor.cli.main [options]

    Programmatically:
        from fpmmonitor import SampleAggregator, get_config
        aggregate = SampleAggregator.from_config(get_config()).collect()
"""

__version__ = "0.1.0"

# Main interfaces
from .config import get_config, clear_config_cache, set_config_path
from .collectors import SampleAggregator, QueueSampler, list_running_containers
from .monitoring import IntervalScheduler, ReportingLoop
from .cli import main_cli

# Model classes for external use
from .models import AgentConfig, AggregateSample, QueueSample

# Errors
from .exceptions import (
    ClassificationError,
    ContainerProcessLookupError,
    DiscoveryError,
    MetricEmissionError,
    MonitorError,
    SocketListingError,
)
from .validation import ValidationError

# Collaborator interfaces
from .runtime import ContainerRuntime, SocketInspector, parse_listen_queue
from .metrics import MetricsSink, create_sink, parse_dimensions
from .classification import command_has_marker, is_monitored_workload

__all__ = [
    "__version__",
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "SampleAggregator",
    "QueueSampler",
    "list_running_containers",
    "IntervalScheduler",
    "ReportingLoop",
    "main_cli",
    # Models
    "AgentConfig",
    "AggregateSample",
    "QueueSample",
    # Errors
    "MonitorError",
    "DiscoveryError",
    "ClassificationError",
    "ContainerProcessLookupError",
    "SocketListingError",
    "MetricEmissionError",
    "ValidationError",
    # Interfaces
    "ContainerRuntime",
    "SocketInspector",
    "MetricsSink",
    "parse_listen_queue",
    "parse_dimensions",
    "create_sink",
    "command_has_marker",
    "is_monitored_workload",
]
