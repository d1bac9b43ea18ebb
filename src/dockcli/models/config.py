"""
Configuration data models.

This module contains the typed configuration sections loaded from `config.toml`.
Every field has a default so the library works without any configuration file.
"""

from dataclasses import dataclass, field

from .watch import ExitPolicy

DEFAULT_EXECUTABLE = "docker"


@dataclass
class DockerConfig:
    """[docker] section."""

    # Name or path of the CLI; bare names are resolved through PATH at spawn time.
    executable: str = DEFAULT_EXECUTABLE


@dataclass
class LogWatchConfig:
    """[log_watch] section."""

    timeout_seconds: float = 30.0
    break_on_error: bool = True
    exit_policy: ExitPolicy = ExitPolicy.WAIT
    # Grace period between SIGTERM and SIGKILL when tearing a watch down.
    termination_timeout: float = 2.0


@dataclass
class LoggingConfig:
    """[logging] section."""

    level: str = "INFO"


@dataclass
class AppConfig:
    """The complete application configuration."""

    docker: DockerConfig = field(default_factory=DockerConfig)
    log_watch: LogWatchConfig = field(default_factory=LogWatchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
