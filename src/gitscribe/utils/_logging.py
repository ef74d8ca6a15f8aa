"""Logging utilities for gitscribe.

This module provides standalone structlog logger factories that write
JSON-formatted or text-formatted logs to a file or to stderr. Each logger is
self-contained and does not modify global structlog configuration, so a host
application's own structlog setup is left alone.
"""

import logging
import sys
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from gitscribe.config import LoggingConfig

LogFormatType = Literal["json", "text"]

# Library default: stay quiet unless asked
_DEFAULT_LEVEL = logging.WARNING


def _log_level_from_string(level: str | None, *, respect_env: bool = True) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error), or None.
        respect_env: If True, GITSCRIBE_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv("GITSCRIBE_DEBUG", None):
        return logging.DEBUG
    if level is None:
        return _DEFAULT_LEVEL

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), _DEFAULT_LEVEL)


def _create_logger(
    log_file_path: str | None,
    *,
    log_level: int,
    log_format: LogFormatType = "json",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a standalone structlog logger.

    Args:
        log_file_path: Path to the log file (opened in append mode), or None
            to write to stderr.
        log_level: Minimum level that is emitted.
        log_format: Output format, either "json" or "text".

    Returns:
        A configured FilteringBoundLogger instance.
    """
    if log_file_path:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger_factory = structlog.WriteLoggerFactory(file=log_path.open("a"))
    else:
        logger_factory = structlog.PrintLoggerFactory(file=sys.stderr)

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    wrapper_class = structlog.make_filtering_bound_logger(log_level)

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            logger_factory(),
            processors=processors,
            wrapper_class=wrapper_class,
            context_class=dict,
        ),
    )


def create_logger(
    config: "LoggingConfig | None" = None,
    **bindings: object,
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create the logger used by Repository and GitBinary.

    The log level is determined by (in order of precedence):
    1. GITSCRIBE_DEBUG environment variable (if set, enables DEBUG level)
    2. ``config.level``
    3. Default: WARNING

    Args:
        config: Logging section of the loaded configuration. When None,
            logs go to stderr as JSON at the default level.
        **bindings: Context bound to every entry (e.g. ``repository="/srv/x"``).

    Returns:
        A FilteringBoundLogger instance.
    """
    if config is None:
        logger = _create_logger(
            None, log_level=_log_level_from_string(None), log_format="json"
        )
    else:
        logger = _create_logger(
            config.file or None,
            log_level=_log_level_from_string(config.level.value),
            log_format=cast("LogFormatType", config.format.value),
        )

    if bindings:
        return logger.bind(**bindings)
    return logger


def create_cli_logger(
    *,
    level: str = "warning",
    log_format: LogFormatType = "text",
    log_file: str = "",
    command: str = "",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger for CLI commands.

    Writes to ``log_file`` when given, otherwise to stderr. The command name
    is bound to all log entries when provided.

    Args:
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to log file (stderr if empty).
        command: Name of the CLI command for context.

    Returns:
        A FilteringBoundLogger instance configured for CLI logging.
    """
    logger = _create_logger(
        log_file or None,
        log_level=_log_level_from_string(level),
        log_format=log_format,
    )

    if command:
        return logger.bind(command=command)
    return logger
