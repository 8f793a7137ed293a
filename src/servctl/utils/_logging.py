"""Logging utilities for servctl.

This module provides a standalone structlog logger factory that writes
JSON-formatted or text-formatted logs to a configured file. Each logger is
self-contained and does not modify global structlog configuration, so a
server's own structlog setup is left alone.
"""

import logging
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, NoReturn, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]

DEBUG_ENV_VAR = "SERVCTL_DEBUG"


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, SERVCTL_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv(DEBUG_ENV_VAR, None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def _create_logger(
    log_file_path: str,
    *,
    log_level: int = logging.INFO,
    log_format: LogFormatType = "json",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a standalone structlog logger writing to the specified file.

    Args:
        log_file_path: Path to the log file (will be opened in append mode).
        log_level: Minimum level that is written.
        log_format: Output format, either "json" or "text".

    Returns:
        A configured FilteringBoundLogger instance.
    """
    log_path = Path(log_file_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    processors: list[structlog.typing.Processor] = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    # Line buffered so entries survive an abrupt exit
    log_file = log_path.open("a", buffering=1, encoding="utf-8")

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.WriteLogger(log_file),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
            context_class=dict,
        ),
    )


def _drop_event(*_: object) -> NoReturn:
    raise structlog.DropEvent


def create_null_logger() -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger that drops every event."""
    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.ReturnLogger(),
            processors=[_drop_event],
            wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
            context_class=dict,
        ),
    )


def create_cli_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
    program: str = "",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger for the lifecycle dispatcher.

    The dispatcher's stdout and stderr carry its user-visible results, so
    log entries only ever go to a file. Without a configured file every
    event is dropped.

    The log level can be overridden by environment variables:
    - SERVCTL_DEBUG: If set, enables DEBUG level logging regardless of config

    Args:
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to the log file. Empty disables logging.
        program: Program name, bound to all entries if given.

    Returns:
        A FilteringBoundLogger instance.
    """
    if not log_file:
        return create_null_logger()

    logger = _create_logger(
        log_file,
        log_level=_log_level_from_string(level, respect_env=True),
        log_format=log_format,
    )

    if program:
        return logger.bind(program=program)
    return logger
