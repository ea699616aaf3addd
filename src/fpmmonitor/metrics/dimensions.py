"""
Metric dimension parsing.
"""

import logging
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


def parse_dimension(dimension_str: str) -> Optional[Tuple[str, str]]:
    """Parse one ``key=value`` string.

    Splits on the first ``=`` and trims both sides, so ``"a=b=c"`` yields
    ``("a", "b=c")``.

    Returns:
        The (name, value) pair, or None if there is no ``=`` or either side
        is empty. CloudWatch rejects dimensions with an empty value.
    """
    key, sep, value = dimension_str.partition("=")
    key, value = key.strip(), value.strip()
    if not sep or not key or not value:
        return None
    return key, value


def parse_dimensions(dimension_strs: Iterable[str]) -> List[Tuple[str, str]]:
    """Parse ``key=value`` strings, dropping malformed entries with a warning.

    A malformed entry never affects the other dimensions.

    Examples:
        >>> parse_dimensions(["env=prod", "malformed", "role = web"])
        [('env', 'prod'), ('role', 'web')]
    """
    dimensions = []
    for dimension_str in dimension_strs:
        parsed = parse_dimension(dimension_str)
        if parsed is None:
            logger.warning(f"Invalid dimension format '{dimension_str}', expected key=value")
            continue
        dimensions.append(parsed)
    return dimensions
