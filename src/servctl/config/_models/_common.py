"""Common configuration types.

This module defines shared types used across configuration models,
including enums and source metadata.
"""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any


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


class ConfigSourceName(StrEnum):
    """Configuration source names in precedence order.

    Values are ordered from highest precedence (CLI) to lowest (DEFAULT).
    Higher-precedence sources override lower-precedence sources when merging.
    """

    CLI = "cli"
    ENV = "env"
    FILE = "file"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """Represents a configuration source.

    Attributes:
        name: The source type identifier.
        path: Path to the config file, or None for non-file sources.
        values: Configuration values from this source.
    """

    name: ConfigSourceName
    path: Path | None
    values: dict[str, Any]  # pyright: ignore[reportExplicitAny]
