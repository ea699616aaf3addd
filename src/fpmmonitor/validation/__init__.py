"""
Validation and error handling for the fpmmonitor package.

This module provides input validation and error handling
with consistent error reporting across the application.
"""

from .exceptions import (
    ErrorSeverity,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
)

from .validators import (
    validate_non_empty_string,
    validate_path_exists,
    validate_positive_float,
    validate_positive_integer,
    validate_string_list,
)

__all__ = [
    # Core functionality
    "ErrorSeverity",
    "ValidationError",
    "handle_error",
    "handle_config_error",
    "handle_cli_error",
    # Validators
    "validate_non_empty_string",
    "validate_path_exists",
    "validate_positive_float",
    "validate_positive_integer",
    "validate_string_list",
]
