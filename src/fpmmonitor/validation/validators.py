"""
Simplified validation functions.

This module provides the value validators used when building the agent
configuration from TOML data and command-line overrides.
"""

import os
from pathlib import Path
from typing import Any, List, Optional, Union

from .exceptions import ValidationError


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is a positive integer.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a positive float.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_path_exists(path: Union[str, Path], field_name: str = "path") -> str:
    """
    Validate that a path exists.

    Args:
        path: Path to validate
        field_name: Name of the field being validated

    Returns:
        Validated path string

    Raises:
        ValidationError: If path doesn't exist
    """
    path_str = str(path)
    if not os.path.exists(path_str):
        raise ValidationError(
            f"{field_name} does not exist: {path_str}",
            field_name=field_name,
            value=path_str
        )
    return path_str


def validate_non_empty_string(value: Any, field_name: str = "value") -> str:
    """
    Validate that a value is a string with at least one non-blank character.

    Returns:
        The stripped string

    Raises:
        ValidationError: If value is not a non-empty string
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=value
        )
    return value.strip()


def validate_string_list(value: Any, field_name: str = "value") -> List[str]:
    """
    Validate a list of strings. A single string is accepted as a one-item list.

    Raises:
        ValidationError: If value is not a string or a list of strings
    """
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ValidationError(
            f"{field_name} must be a list of strings",
            field_name=field_name,
            value=value
        )
    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise ValidationError(
                f"{field_name} item {i} must be a string, got {item!r}",
                field_name=field_name,
                value=value
            )
    return list(value)
