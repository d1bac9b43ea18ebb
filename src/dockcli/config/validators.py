"""
Validation of raw configuration data into typed configuration sections.
"""

import logging
from typing import Any, Dict

from ..models.config import AppConfig, DockerConfig, LoggingConfig, LogWatchConfig
from ..models.watch import ExitPolicy
from ..validation import (
    ValidationError,
    validate_bool,
    validate_enum_choice,
    validate_executable,
    validate_log_level,
    validate_positive_float,
)

logger = logging.getLogger(__name__)

KNOWN_SECTIONS = ("docker", "log_watch", "logging")


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ValidationError(f"[{name}] must be a table", field_name=name, value=section)
    return section


def validate_docker_config(data: Dict[str, Any]) -> DockerConfig:
    defaults = DockerConfig()
    return DockerConfig(
        executable=validate_executable(
            data.get("executable", defaults.executable), field_name="docker.executable"
        ),
    )


def validate_log_watch_config(data: Dict[str, Any]) -> LogWatchConfig:
    """
    Validate the [log_watch] section.

    Args:
        data: Raw section contents

    Returns:
        LogWatchConfig with defaults for missing keys

    Raises:
        ValidationError: If any value is out of range or of the wrong type
    """
    defaults = LogWatchConfig()

    timeout_seconds = validate_positive_float(
        data.get("timeout_seconds", defaults.timeout_seconds),
        min_value=0.0,
        max_value=86400.0,
        exclusive_min=True,
        field_name="log_watch.timeout_seconds",
    )
    break_on_error = validate_bool(
        data.get("break_on_error", defaults.break_on_error),
        field_name="log_watch.break_on_error",
    )
    exit_policy = validate_enum_choice(
        data.get("exit_policy", defaults.exit_policy.value),
        choices=[policy.value for policy in ExitPolicy],
        field_name="log_watch.exit_policy",
    )
    termination_timeout = validate_positive_float(
        data.get("termination_timeout", defaults.termination_timeout),
        min_value=0.0,
        max_value=60.0,
        field_name="log_watch.termination_timeout",
    )

    return LogWatchConfig(
        timeout_seconds=timeout_seconds,
        break_on_error=break_on_error,
        exit_policy=ExitPolicy(exit_policy),
        termination_timeout=termination_timeout,
    )


def validate_logging_config(data: Dict[str, Any]) -> LoggingConfig:
    return LoggingConfig(
        level=validate_log_level(data.get("level", LoggingConfig().level), field_name="logging.level")
    )


def validate_app_config(data: Dict[str, Any]) -> AppConfig:
    """Validate a whole parsed config.toml."""
    for name in data:
        if name not in KNOWN_SECTIONS:
            logger.warning(f"Ignoring unknown configuration section [{name}]")

    return AppConfig(
        docker=validate_docker_config(_section(data, "docker")),
        log_watch=validate_log_watch_config(_section(data, "log_watch")),
        logging=validate_logging_config(_section(data, "logging")),
    )
