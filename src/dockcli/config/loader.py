"""
Reading of the dockcli configuration file.

Only the file format is handled here; the meaning of each section is checked
in validators.py.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Union

from ..validation import ErrorSeverity, handle_config_error

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.toml"


def resolve_config_file(path: Union[str, Path]) -> Path:
    """
    Turn a user-supplied location into the path of the config file.

    A directory is taken to contain `config.toml`; `~` is expanded.
    """
    file_path = Path(path).expanduser()
    if file_path.is_dir():
        file_path = file_path / CONFIG_FILE_NAME
    return file_path


def load_toml_file(file_path: Path) -> Dict[str, Any]:
    """
    Parse one TOML document.

    Raises:
        FileNotFoundError: If file_path is not an existing file
        tomllib.TOMLDecodeError: If the document is not valid TOML
    """
    if not file_path.is_file():
        raise FileNotFoundError(f"configuration file not found: {file_path}")

    with open(file_path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            handle_config_error(e, f"parsing {file_path}", severity=ErrorSeverity.CRITICAL, logger=logger)

    logger.debug(f"Read sections {sorted(data)} from {file_path}")
    return data


def load_main_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Locate and read the configuration file at (or inside) config_path."""
    file_path = resolve_config_file(config_path)
    logger.info(f"Loading configuration from: {file_path}")
    return load_toml_file(file_path)
