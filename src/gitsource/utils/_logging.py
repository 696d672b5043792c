"""Logging utilities for gitsource.

This module provides standalone structlog logger factories that write
JSON-formatted or text-formatted logs to a file or to stderr. Each logger
is self-contained and does not modify global structlog configuration, so
embedding applications keep control of their own logging setup.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from os import getenv
from pathlib import Path
from typing import Literal, cast

import structlog
from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]


def _get_log_level(default: int = logging.INFO) -> int:
    """Get the log level from environment variables.

    Checks GITSOURCE_DEBUG first (sets DEBUG if present), then
    GITSOURCE_LOG_LEVEL.

    Args:
        default: Level used when neither variable is set.

    Returns:
        The logging level as an integer.
    """
    if getenv("GITSOURCE_DEBUG", None):
        return logging.DEBUG

    level_name = getenv("GITSOURCE_LOG_LEVEL", None)
    if not level_name:
        return default
    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level_name.upper(), default)


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, GITSOURCE_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv("GITSOURCE_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def _create_logger(
    log_file_path: str | None,
    *,
    log_level: int | None = None,
    log_format: LogFormatType = "json",
    max_bytes: int | None = None,
    backup_count: int | None = None,
) -> FilteringBoundLogger:
    """Create a standalone structlog logger.

    Args:
        log_file_path: Path to the log file (opened in append mode), or None
            to write to stderr.
        log_level: Override log level (uses env vars if not specified).
        log_format: Output format, either "json" or "text".
        max_bytes: Maximum size in bytes before rotation. Must be set with
            backup_count for rotation to be enabled.
        backup_count: Number of rotated log files to keep. Must be set with
            max_bytes for rotation to be enabled.

    Returns:
        A configured FilteringBoundLogger instance.
    """
    effective_level = log_level if log_level is not None else _get_log_level()

    stdlib_logger: logging.Logger | None = None
    if log_file_path is None:
        logger_factory = structlog.WriteLoggerFactory(file=sys.stderr)
    else:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        if max_bytes is not None and backup_count is not None:
            # Use stdlib logging with RotatingFileHandler for rotation support
            stdlib_logger = logging.getLogger(
                f"gitsource.{log_path.stem}.{id(log_path)}"
            )
            stdlib_logger.handlers.clear()
            stdlib_logger.propagate = False
            stdlib_logger.setLevel(effective_level)

            handler = RotatingFileHandler(
                log_path,
                maxBytes=max_bytes,
                backupCount=backup_count,
            )
            handler.setLevel(effective_level)
            handler.setFormatter(logging.Formatter("%(message)s"))
            stdlib_logger.addHandler(handler)
            logger_factory = structlog.stdlib.LoggerFactory()
        else:
            logger_factory = structlog.WriteLoggerFactory(file=log_path.open("a"))

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    wrapper_class = structlog.make_filtering_bound_logger(effective_level)
    raw_logger = stdlib_logger if stdlib_logger is not None else logger_factory()

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            raw_logger,
            processors=processors,
            wrapper_class=wrapper_class,
            context_class=dict,
        ),
    )


def create_logger(
    *,
    level: str | None = None,
    log_format: LogFormatType = "json",
    log_file: str = "",
    max_bytes: int | None = None,
    backup_count: int | None = None,
    command: str = "",
    default_level: str = "info",
) -> FilteringBoundLogger:
    """Create a logger for gitsource operations.

    The log level is determined by (in order of precedence):
    1. GITSOURCE_DEBUG environment variable (if set, enables DEBUG level)
    2. The `level` parameter (if provided)
    3. GITSOURCE_LOG_LEVEL environment variable
    4. `default_level`

    Args:
        level: Optional log level string (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to log file (writes to stderr if empty).
        max_bytes: Maximum log file size before rotation.
        backup_count: Number of rotated log files to keep.
        command: Name of the CLI command for context (bound to all entries).
        default_level: Level used when neither `level` nor an environment
            variable sets one.

    Returns:
        A FilteringBoundLogger instance.
    """
    if level is not None:
        effective_level = _log_level_from_string(level, respect_env=True)
    else:
        effective_level = _get_log_level(default=_log_level_from_string(default_level))

    logger = _create_logger(
        log_file or None,
        log_level=effective_level,
        log_format=log_format,
        max_bytes=max_bytes,
        backup_count=backup_count,
    )

    if command:
        return logger.bind(command=command)
    return logger


def get_library_logger() -> FilteringBoundLogger:
    """Get the logger used when a caller does not supply one.

    Writes text to stderr at WARNING level unless GITSOURCE_DEBUG or
    GITSOURCE_LOG_LEVEL say otherwise.

    Returns:
        A FilteringBoundLogger instance.
    """
    return _create_logger(
        None,
        log_level=_get_log_level(default=logging.WARNING),
        log_format="text",
    )
