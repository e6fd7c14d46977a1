"""
Configuration management for the cbtail package.

This module provides a clean interface for loading, validating, and accessing
configuration data from a TOML file.
"""

from .manager import (
    clear_config_cache,
    get_config,
    get_config_path,
    set_config_path,
)
from .loader import load_main_config, load_toml_file
from .validators import (
    validate_app_config,
    validate_aws_config,
    validate_runner_config,
)

__all__ = [
    # Main interface
    "get_config",
    "get_config_path",
    "set_config_path",
    "clear_config_cache",
    # Advanced interface
    "load_toml_file",
    "load_main_config",
    "validate_app_config",
    "validate_aws_config",
    "validate_runner_config",
]
