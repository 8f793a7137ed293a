"""servctl configuration.

This module provides the public API for configuration management,
including loading, validation, and typed access to configuration values.

Example:
    >>> from servctl.config import Config
    >>> config = Config.load(cli_overrides={"pidfile": "/run/app.pid"})
    >>> config.pidfile
    '/run/app.pid'
"""

# Re-export exceptions from main exceptions module
from servctl.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG, DEFAULT_ENV_PREFIX, available_cpus
from ._loader import (
    copy_value,
    deep_merge,
    parse_env_vars,
    read_toml_file,
    set_nested_key,
)
from ._models import (
    Config,
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LoggingConfig,
    LogLevel,
)
from ._validation import ValidationIssue, validate

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_ENV_PREFIX",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "ConfigValidationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ValidationIssue",
    "available_cpus",
    "copy_value",
    "deep_merge",
    "parse_env_vars",
    "read_toml_file",
    "set_nested_key",
    "validate",
]
