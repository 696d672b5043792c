"""Configuration models.

This module provides the pydantic models for gitsource configuration:
logging output and fetch behaviour.
"""

from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gitsource.config._loader import deep_merge, parse_env_vars, read_toml_file
from gitsource.exceptions import ConfigValidationError
from gitsource.transport import DEFAULT_BRANCH

ENV_PREFIX = "GITSOURCE_"


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold, or None to defer to
            ``GITSOURCE_LOG_LEVEL`` and then warning.
        format: Log output format.
        file: Path to log file (empty writes to stderr).
        max_bytes: Rotate the log file beyond this size.
        backup_count: Rotated log files to keep.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel | None = None
    format: LogFormat = LogFormat.TEXT
    file: str = ""
    max_bytes: int | None = Field(default=None, gt=0)
    backup_count: int | None = Field(default=None, ge=0)


class FetchConfig(BaseModel):
    """Fetch configuration section.

    Attributes:
        default_branch: Branch fetched when a locator names no revision.
        root: Directory local repository paths are resolved beneath.
        timeout: Seconds allowed for a whole read, or None for no limit.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    default_branch: str = Field(default=DEFAULT_BRANCH, min_length=1)
    root: Path = Path("/")
    timeout: float | None = Field(default=None, gt=0)


class Config(BaseModel):
    """Configuration container with typed access.

    Use ``load`` or ``from_dict`` rather than the constructor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingConfig = LoggingConfig()
    fetch: FetchConfig = FetchConfig()

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, source: str | None = None) -> Self:  # pyright: ignore[reportExplicitAny]
        """Build a configuration from a plain dictionary.

        Args:
            data: Nested configuration values.
            source: Name of the source, for error messages.

        Returns:
            The validated configuration.

        Raises:
            ConfigValidationError: If a value fails validation.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            first = e.errors()[0]
            key = ".".join(str(part) for part in first["loc"])
            msg = f"Invalid configuration value for {key}: {first['msg']}"
            raise ConfigValidationError(msg, key=key, source=source) from e

    @classmethod
    def load(
        cls,
        *,
        config_path: Path | None = None,
        environ: Mapping[str, str] | None = None,
        cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
    ) -> Self:
        """Load configuration from all sources.

        Sources, lowest to highest precedence: defaults, the TOML file at
        ``config_path``, ``GITSOURCE_`` environment variables, and
        ``cli_overrides``.

        Args:
            config_path: Optional TOML configuration file. Must exist.
            environ: Environment mapping. Defaults to ``os.environ``.
            cli_overrides: Nested values from command-line options.

        Returns:
            The merged, validated configuration.

        Raises:
            FileNotFoundError: If ``config_path`` does not exist.
            ConfigLoadError: If the TOML file cannot be parsed.
            ConfigValidationError: If a merged value fails validation.
        """
        merged: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
        source = "default"

        if config_path is not None:
            merged = deep_merge(merged, read_toml_file(config_path))
            source = str(config_path)

        env_values = parse_env_vars(ENV_PREFIX, environ)
        if env_values:
            merged = deep_merge(merged, env_values)
            source = "env"

        if cli_overrides:
            merged = deep_merge(merged, cli_overrides)
            source = "cli"

        return cls.from_dict(merged, source=source)
