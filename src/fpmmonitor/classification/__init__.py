"""
Workload classification utilities for the fpmmonitor package.

This module decides which containers run the monitored workload based on
an exact token match in their launch command.
"""

from .classifier import command_has_marker, is_monitored_workload

__all__ = [
    "command_has_marker",
    "is_monitored_workload",
]
