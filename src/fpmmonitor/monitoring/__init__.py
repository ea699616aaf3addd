"""
Periodic reporting for the fpmmonitor package.
"""

from .reporter import IntervalScheduler, ReportingLoop

__all__ = [
    "IntervalScheduler",
    "ReportingLoop",
]
