"""
Configuration management for the fpmmonitor package.

This module provides a clean interface for loading, validating, and accessing
configuration data from a TOML file with singleton pattern management.
"""

# Main configuration interface
from .manager import (
    DEFAULT_CONFIG_FILE_PATH,
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    merge_overrides,
    reset_config,
    set_config_overrides,
    set_config_path,
)

# For advanced usage - direct access to loaders and validators
from .loader import load_main_config, load_toml_file
from .validators import validate_agent_config

__all__ = [
    # Main interface
    "DEFAULT_CONFIG_FILE_PATH",
    "get_config",
    "set_config_path",
    "set_config_overrides",
    "reset_config",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    "merge_overrides",
    # Advanced interface
    "load_toml_file",
    "load_main_config",
    "validate_agent_config",
]
