"""
System interaction utilities.

Command execution with timeouts and error capture, and availability checks
for the external tools the agent shells out to.
"""

from .commands import EXECUTION_FAILED, find_missing_tools, run_command

__all__ = [
    "EXECUTION_FAILED",
    "find_missing_tools",
    "run_command",
]
