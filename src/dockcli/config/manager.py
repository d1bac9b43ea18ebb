"""
Process-wide configuration access.

The configuration is read lazily on the first get_config() call and cached.
Without a configured file, the dataclass defaults of AppConfig are used, so
the library works out of the box with `docker` on PATH.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..models.config import AppConfig
from ..validation import ErrorSeverity, ValidationError, handle_config_error
from .loader import load_main_config
from .validators import validate_app_config

logger = logging.getLogger(__name__)

# Cached configuration, None until first use or after a reset.
_CONFIG: Optional[AppConfig] = None

# File (or directory holding config.toml) to read; None selects the defaults.
_CONFIG_FILE_PATH: Optional[Path] = None


def set_config_path(config_path: Optional[Union[str, Path]]) -> None:
    """
    Point the configuration at a file, or pass None to use the defaults.

    Any cached configuration is discarded.
    """
    global _CONFIG_FILE_PATH
    _CONFIG_FILE_PATH = Path(config_path) if config_path is not None else None
    clear_config_cache()
    logger.debug(f"Configuration path is now {_CONFIG_FILE_PATH}")


def clear_config_cache() -> None:
    """Drop the cached configuration; the next get_config() reads it again."""
    global _CONFIG
    _CONFIG = None


def _load_config(config_path: Optional[Path]) -> AppConfig:
    if config_path is None:
        logger.debug("No configuration file set, using built-in defaults")
        return AppConfig()

    try:
        app_config = validate_app_config(load_main_config(config_path))
    except FileNotFoundError as e:
        handle_config_error(e, "lookup", severity=ErrorSeverity.CRITICAL, logger=logger)
    except ValidationError as e:
        handle_config_error(e, f"value {e.field_name}", severity=ErrorSeverity.ERROR, logger=logger)

    logger.info(f"Configuration loaded from {config_path} (docker executable: {app_config.docker.executable})")
    return app_config


def get_config() -> AppConfig:
    """
    Return the configuration, reading it on first use.

    Raises:
        FileNotFoundError: If the configured file does not exist
        ValidationError: If a value is out of range or of the wrong type
        tomllib.TOMLDecodeError: If the file is not valid TOML
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(_CONFIG_FILE_PATH)
    return _CONFIG


def is_config_loaded() -> bool:
    return _CONFIG is not None


def get_config_info() -> Dict[str, Any]:
    """Summarize where the configuration comes from and whether it is cached."""
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(_CONFIG_FILE_PATH) if _CONFIG_FILE_PATH is not None else None,
        "executable": _CONFIG.docker.executable if _CONFIG is not None else None,
    }
