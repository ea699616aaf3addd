"""
Data models for the fpmmonitor agent.

Configuration Models:
- Agent-wide settings loaded once at startup

Sample Models:
- Per-container queue samples and the per-tick aggregate

All models are plain dataclasses.
"""

from .config import AgentConfig
from .samples import AggregateSample, QueueSample

__all__ = [
    "AgentConfig",
    "AggregateSample",
    "QueueSample",
]
