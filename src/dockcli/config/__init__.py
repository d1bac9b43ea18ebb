"""
Configuration management for the dockcli package.

This module provides a clean interface for loading, validating, and accessing
configuration data from a TOML file with singleton pattern management.
"""

from .manager import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    set_config_path,
)

from .loader import load_main_config, load_toml_file, resolve_config_file
from .validators import (
    validate_app_config,
    validate_docker_config,
    validate_log_watch_config,
    validate_logging_config,
)

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    # Advanced interface
    "load_toml_file",
    "load_main_config",
    "resolve_config_file",
    "validate_app_config",
    "validate_docker_config",
    "validate_log_watch_config",
    "validate_logging_config",
]
