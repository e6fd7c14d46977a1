"""
Configuration management and caching.

This module provides the main configuration loading interface and caches
the loaded configuration so it is read only once per process.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from ..models.config import AppConfig
from ..validation import handle_config_error, ErrorSeverity
from .loader import load_main_config
from .validators import validate_app_config

logger = logging.getLogger(__name__)

# The loaded AppConfig, once get_config() has been called.
_CONFIG: Optional[AppConfig] = None

# Default configuration file, relative to the source checkout. CBTAIL_CONFIG
# or set_config_path() take precedence.
_DEFAULT_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"
_CONFIG_FILE_PATH: Optional[Path] = None


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path and drop any cached configuration.

    Args:
        config_path: Path to the config.toml file
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path)
    _CONFIG = None
    logger.debug(f"Configuration path set to: {config_path}")


def get_config_path() -> Path:
    """Return the configuration file path that get_config() will read."""
    if _CONFIG_FILE_PATH is not None:
        return _CONFIG_FILE_PATH
    env_path = os.environ.get("CBTAIL_CONFIG")
    if env_path:
        return Path(env_path)
    return _DEFAULT_CONFIG_FILE_PATH


def clear_config_cache() -> None:
    """Clear the cached configuration, forcing a reload on next access."""
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def _load_config(config_path: Path, required: bool) -> AppConfig:
    """
    Load and validate the application configuration.

    Raises:
        FileNotFoundError: If a required file does not exist
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    try:
        config_data = load_main_config(config_path, required=required)
        app_config = validate_app_config(config_data)
        logger.debug(f"Loaded configuration: {app_config}")
        return app_config
    except Exception as e:
        handle_config_error(
            error=e,
            context=f"processing configuration {config_path}",
            severity=ErrorSeverity.ERROR,
            reraise=True,
            logger=logger
        )
        raise


def get_config() -> AppConfig:
    """
    Get the application configuration, loading it if necessary.

    Returns:
        The cached AppConfig instance
    """
    global _CONFIG
    if _CONFIG is None:
        config_path = get_config_path()
        # Only the built-in default path may be absent.
        required = config_path != _DEFAULT_CONFIG_FILE_PATH
        _CONFIG = _load_config(config_path, required)
    return _CONFIG
