# pyright: reportExplicitAny=false, reportAny=false
"""Configuration container with typed access.

This module provides the Config model that carries every option of a
servctl-managed server, merged from defaults, a TOML file, environment
variables and command-line flags.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, PrivateAttr

from servctl.config._defaults import (
    DEFAULT_CONFIG,
    DEFAULT_ENV_PREFIX,
    available_cpus,
)
from servctl.config._loader import deep_merge, parse_env_vars, read_toml_file
from servctl.config._models._common import ConfigSource, ConfigSourceName
from servctl.config._models._logging import LoggingConfig
from servctl.config._validation import validate
from servctl.exceptions import ConfigLoadError


class Config(BaseModel):
    """Options of a servctl-managed server.

    Immutable. Use Config.load rather than the constructor so that values
    are merged with defaults and validation errors are reported as
    ConfigValidationError.

    Attributes:
        stdout: File to redirect standard output to (empty leaves it alone).
        stderr: File to redirect standard error to (empty leaves it alone).
        pidfile: Pidfile path (empty means no pidfile).
        gomaxprocs: Parallelism hint handed to the server.
        devrestarter: Whether to restart on source changes during development.
        devrestarter_watch: Paths the dev restarter watches.
        logging: Logging section.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    stdout: str = ""
    stderr: str = ""
    pidfile: str = ""
    gomaxprocs: PositiveInt = Field(default_factory=available_cpus)
    devrestarter: bool = False
    devrestarter_watch: tuple[str, ...] = ()
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())

    @classmethod
    def load(
        cls,
        *,
        config_path: Path | None = None,
        env_prefix: str = DEFAULT_ENV_PREFIX,
        environ: Mapping[str, str] | None = None,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load merged configuration from all sources.

        Sources are merged in precedence order (defaults -> file -> env ->
        cli). A config file is only read when a path is given, either as
        ``config_path`` or through the ``<prefix>CONFIG`` variable.

        Args:
            config_path: Explicit config file path (the --config flag).
            env_prefix: Prefix of environment variables to read.
            environ: Environment to read. Defaults to ``os.environ``.
            cli_overrides: Values given explicitly on the command line.

        Returns:
            Merged configuration object.

        Raises:
            ConfigLoadError: If the config file is missing or malformed.
            ConfigValidationError: If the merged config fails validation.
        """
        env_values = parse_env_vars(env_prefix, environ)
        # The file location is not itself a config value
        env_config_path = env_values.pop("config", None)

        sources: list[ConfigSource] = [
            ConfigSource(
                name=ConfigSourceName.DEFAULT, path=None, values=DEFAULT_CONFIG
            )
        ]

        path = config_path or (Path(env_config_path) if env_config_path else None)
        if path is not None:
            sources.append(_file_source(path))

        sources.append(
            ConfigSource(name=ConfigSourceName.ENV, path=None, values=env_values)
        )
        sources.append(
            ConfigSource(
                name=ConfigSourceName.CLI, path=None, values=cli_overrides or {}
            )
        )

        merged: dict[str, Any] = {}
        for source in sources:
            if source.values:
                merged = deep_merge(merged, source.values)

        config = validate(cls, merged)
        # Highest precedence first, as reported by `sources`
        config._sources = tuple(reversed(sources))
        return config

    @property
    def sources(self) -> list[ConfigSource]:
        """Return the sources that contributed to this configuration.

        Returns:
            List of ConfigSource objects, highest precedence first.
        """
        return list(self._sources)


def _file_source(path: Path) -> ConfigSource:
    try:
        values = read_toml_file(path)
    except FileNotFoundError as e:
        msg = f"config file not found: {path}"
        raise ConfigLoadError(msg, path=path) from e
    except OSError as e:
        msg = f"failed to read config file {path}: {e.strerror or e}"
        raise ConfigLoadError(msg, path=path) from e
    return ConfigSource(name=ConfigSourceName.FILE, path=path, values=values)
