"""
Configuration management and singleton pattern.

This module provides the main configuration loading and management interface,
implementing a singleton pattern to ensure configuration is loaded only once.
Command-line overrides are merged on top of the file before validation.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.config import AgentConfig
from ..validation import handle_config_error, ErrorSeverity
from .loader import load_main_config
from .validators import validate_agent_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[AgentConfig] = None

# A missing file at the default path means "use built-in defaults"; a path set
# through set_config_path() must exist.
DEFAULT_CONFIG_FILE_PATH = Path("/etc/fpmmonitor/config.toml")
_CONFIG_FILE_PATH = DEFAULT_CONFIG_FILE_PATH
_CONFIG_PATH_EXPLICIT = False

# Nested {section: {key: value}} overrides, typically from the CLI.
_CONFIG_OVERRIDES: Dict[str, Dict[str, Any]] = {}


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path.

    Args:
        config_path: Path to the config.toml file

    Note:
        This clears any cached configuration so the next get_config()
        call reloads from the new path.
    """
    global _CONFIG_FILE_PATH, _CONFIG_PATH_EXPLICIT, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path)
    _CONFIG_PATH_EXPLICIT = True
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def set_config_overrides(overrides: Dict[str, Dict[str, Any]]) -> None:
    """
    Register section-level overrides applied on top of the file contents.

    Keys whose value is None are ignored, so argparse defaults can be passed
    through unchanged.
    """
    global _CONFIG_OVERRIDES, _CONFIG
    _CONFIG_OVERRIDES = {
        section: {key: value for key, value in values.items() if value is not None}
        for section, values in overrides.items()
    }
    _CONFIG = None


def reset_config() -> None:
    """Restore the default path, drop overrides and clear the cache."""
    global _CONFIG_FILE_PATH, _CONFIG_PATH_EXPLICIT, _CONFIG_OVERRIDES, _CONFIG
    _CONFIG_FILE_PATH = DEFAULT_CONFIG_FILE_PATH
    _CONFIG_PATH_EXPLICIT = False
    _CONFIG_OVERRIDES = {}
    _CONFIG = None


def clear_config_cache() -> None:
    """
    Clear the cached configuration, forcing a reload on next access.
    """
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def merge_overrides(
    config_data: Dict[str, Any], overrides: Dict[str, Dict[str, Any]]
) -> Dict[str, Any]:
    """Return a copy of ``config_data`` with ``overrides`` applied per section."""
    merged = copy.deepcopy(config_data)
    for section, values in overrides.items():
        if not values:
            continue
        section_data = merged.setdefault(section, {})
        section_data.update(values)
    return merged


def _load_config(config_path: Path, required: bool) -> AgentConfig:
    """
    Load the agent configuration from TOML and apply overrides.

    Args:
        config_path: Path to the config.toml file
        required: Whether a missing file is an error

    Returns:
        Fully validated AgentConfig instance

    Raises:
        FileNotFoundError: If a required configuration file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    try:
        if config_path.exists() or required:
            config_data = load_main_config(config_path)
        else:
            logger.info(f"No configuration file at {config_path}, using built-in defaults")
            config_data = {}

        agent_config = validate_agent_config(merge_overrides(config_data, _CONFIG_OVERRIDES))
        logger.debug(f"Loaded configuration: {agent_config}")
        return agent_config

    except Exception as e:
        handle_config_error(
            error=e,
            context="loading configuration",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def get_config() -> AgentConfig:
    """
    Get the global agent configuration, loading it if necessary.

    Returns:
        The singleton AgentConfig instance

    Raises:
        FileNotFoundError: If an explicitly set configuration file is missing
        OSError: If the configuration file cannot be read
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(_CONFIG_FILE_PATH, required=_CONFIG_PATH_EXPLICIT)
    return _CONFIG


def is_config_loaded() -> bool:
    """Check if configuration has been loaded and cached."""
    return _CONFIG is not None


def get_config_info() -> dict:
    """
    Get information about the current configuration state.

    Returns:
        Dictionary with configuration metadata
    """
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(_CONFIG_FILE_PATH),
        "config_path_explicit": _CONFIG_PATH_EXPLICIT,
        "override_sections": sorted(_CONFIG_OVERRIDES),
    }
