"""
Command execution utilities.

This module provides the subprocess wrapper every external tool call goes
through (docker, nsenter, ss), and a check for tool availability on PATH.
"""

import logging
import shlex
import shutil
import subprocess
from typing import Iterable, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# Return code reported when the command could not be run or was killed on timeout.
EXECUTION_FAILED = -1


def run_command(
    command: Sequence[str], timeout: Optional[float] = None
) -> Tuple[int, str, str]:
    """Execute a command and capture its output with robust error handling.

    Runs the command without a shell, capturing both stdout and stderr while
    handling missing executables and timeouts gracefully.

    Args:
        command: Argument vector, e.g. ``["docker", "ps", "-q"]``.
        timeout: Seconds to wait before killing the command. None waits forever.

    Returns:
        Tuple of (return_code, stdout_string, stderr_string).
        return_code is EXECUTION_FAILED (-1) for execution errors and timeouts.

    Note:
        Uses UTF-8 encoding with error replacement for robust text handling.
    """
    command_str = shlex.join(command)
    logger.debug(f"Executing command: '{command_str}' (timeout: {timeout})")
    try:
        process = subprocess.run(
            list(command),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
        return process.returncode, process.stdout, process.stderr
    except subprocess.TimeoutExpired:
        logger.warning(f"Command timed out after {timeout}s: '{command_str}'")
        return EXECUTION_FAILED, "", f"Error: Command timed out after {timeout}s"
    except FileNotFoundError as e:
        logger.error(f"Command not found: {command[0]}: {type(e).__name__}: {e}")
        return EXECUTION_FAILED, "", f"Error: Command not found '{command[0]}'"
    except OSError as e:
        logger.error(f"Failed to run '{command_str}': {type(e).__name__}: {e}")
        return EXECUTION_FAILED, "", f"Error: {e}"


def find_missing_tools(tools: Iterable[str]) -> List[str]:
    """Return the names in ``tools`` that are not found on PATH."""
    return [tool for tool in tools if shutil.which(tool) is None]
