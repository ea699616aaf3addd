"""
Namespace-scoped socket listing via ``nsenter`` and ``ss``.

The listing comes from ``ss -lxnH`` run inside the target's network namespace:
listening Unix sockets, numeric, no header. parse_listen_queue() extracts the
queue length of one socket path from that text.
"""

import logging
import shlex
from typing import List, Optional

from ..exceptions import SocketListingError
from ..system.commands import run_command
from .base import SocketInspector

logger = logging.getLogger(__name__)

SS_LISTEN_ARGS = ["ss", "-lxnH"]

# Zero-based column holding the queue length on a matching ss line.
QUEUE_FIELD_INDEX = 2


class NsenterSocketInspector(SocketInspector):
    """
    Lists listening Unix sockets inside another process's network namespace.

    Entering a foreign namespace needs elevated privilege, so the command is
    prefixed with ``sudo_command`` unless it is empty.
    """

    def __init__(self, sudo_command: str = "sudo", timeout: Optional[float] = None):
        self.sudo_command = sudo_command
        self.timeout = timeout

    def build_command(self, pid: int) -> List[str]:
        prefix = shlex.split(self.sudo_command) if self.sudo_command else []
        return prefix + ["nsenter", "-t", str(pid), "-n"] + SS_LISTEN_ARGS

    def list_listening_sockets(self, pid: int) -> str:
        returncode, stdout, stderr = run_command(self.build_command(pid), timeout=self.timeout)
        if returncode != 0:
            raise SocketListingError(
                f"nsenter ss failed for PID {pid} with status {returncode}: {stderr.strip()}",
                pid=pid,
            )
        return stdout


def parse_listen_queue(listing: str, socket_path: str) -> int:
    """Extract the listen queue length of ``socket_path`` from an ss listing.

    The first line with a whitespace-delimited field equal to ``socket_path``
    is used; later matches are ignored. Its third field is parsed as the
    queue length.

    Args:
        listing: Raw ``ss -lxnH`` output.
        socket_path: Exact path of the listening socket.

    Returns:
        The queue length, or 0 when no line matches or the field on the
        matching line is missing or not a non-negative integer.

    Examples:
        >>> parse_listen_queue("u_str 0 5 /var/run/php-fpm/www.socket 1 * 0", "/var/run/php-fpm/www.socket")
        5
        >>> parse_listen_queue("", "/var/run/php-fpm/www.socket")
        0
    """
    for line in listing.splitlines():
        fields = line.split()
        if socket_path not in fields:
            continue

        if len(fields) <= QUEUE_FIELD_INDEX:
            logger.debug(f"Matching ss line has too few fields: '{line}'")
            return 0

        queue_field = fields[QUEUE_FIELD_INDEX]
        if not (queue_field.isascii() and queue_field.isdigit()):
            logger.debug(f"Non-numeric queue field '{queue_field}' on ss line: '{line}'")
            return 0

        return int(queue_field)

    return 0
