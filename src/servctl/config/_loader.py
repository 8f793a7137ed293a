# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""TOML configuration file loading and merging."""

import json
import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from servctl.exceptions import ConfigLoadError

_TOML_LOCATION_RE = re.compile(r"\(at line (\d+), column (\d+)\)")


def _error_location(error: tomllib.TOMLDecodeError) -> tuple[int | None, int | None]:
    line: int | None = getattr(error, "lineno", None)
    column: int | None = getattr(error, "colno", None)
    if line is None:
        # Older interpreters only carry the location in the message
        match = _TOML_LOCATION_RE.search(str(error))
        if match is not None:
            line, column = int(match[1]), int(match[2])
    return line, column


def read_toml_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read and parse a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed TOML content as dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file cannot be parsed.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"failed to parse config file {path}: {e}"
        line, column = _error_location(e)
        raise ConfigLoadError(msg, path=path, line=line, column=column) from e


def deep_merge(
    base: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    override: dict[str, Any],  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Deep merge two configuration dictionaries.

    Merges `override` into `base`, returning a new dictionary. Neither input
    is modified.

    Args:
        base: Base configuration (lower precedence).
        override: Override configuration (higher precedence).

    Returns:
        Merged configuration dictionary.

    Merge rules:
        - Dictionaries are recursively merged
        - Arrays are replaced entirely (no element-wise merge)
        - Scalars are replaced with override value
        - Missing keys in override preserve base values
    """
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key in base.keys() | override.keys():
        if key not in override:
            result[key] = copy_value(base[key])
        elif key not in base:
            result[key] = copy_value(override[key])
        else:
            base_val = base[key]
            override_val = override[key]

            if isinstance(base_val, dict) and isinstance(override_val, dict):
                result[key] = deep_merge(base_val, override_val)
            else:
                # Type mismatch or non-dicts - override wins
                result[key] = copy_value(override_val)

    return result


def copy_value(value: Any) -> Any:  # pyright: ignore[reportExplicitAny]
    """Create a deep copy of a configuration value.

    Recursively copies dicts and lists to ensure the returned structure is
    fully independent of the original.

    Args:
        value: The value to copy.

    Returns:
        A deep copy of the value.
    """
    if isinstance(value, dict):
        return {k: copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    return value


def parse_env_vars(
    prefix: str,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Parse environment variables into config dictionary.

    Args:
        prefix: Environment variable prefix, e.g. "SERVCTL_".
        environ: Environment to read. Defaults to ``os.environ``.

    Returns:
        Dictionary of parsed config values with nested structure.

    Environment variable naming:
        - Add prefix (SERVCTL_)
        - Convert to uppercase
        - Replace dots with double underscores
        - Example: logging.level -> SERVCTL_LOGGING__LEVEL
    """
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    source = os.environ if environ is None else environ

    for key, value in source.items():
        if not key.startswith(prefix):
            continue

        # SERVCTL_LOGGING__LEVEL -> logging.level
        config_key = key[len(prefix) :]
        if not config_key:
            continue

        config_path = config_key.replace("__", ".").lower()
        set_nested_key(result, config_path, _parse_env_value(value))

    return result


def _parse_env_value(value: str) -> Any:  # pyright: ignore[reportExplicitAny]
    """Parse an environment variable value.

    JSON arrays and objects are decoded. Everything else stays a string and
    is coerced by the config model, so "0" can still be a path or a count.

    Args:
        value: The raw string value from the environment variable.

    Returns:
        The decoded JSON value, or the string unchanged.
    """
    stripped = value.strip()
    if (stripped.startswith("[") and stripped.endswith("]")) or (
        stripped.startswith("{") and stripped.endswith("}")
    ):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            pass

    return value


def set_nested_key(
    d: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    key_path: str,
    value: Any,  # pyright: ignore[reportExplicitAny]
) -> None:
    """Set a value at a dotted key path in a nested dictionary.

    Creates intermediate dictionaries as needed.

    Args:
        d: The dictionary to modify.
        key_path: Dotted key path (e.g., "logging.level").
        value: The value to set.

    Example:
        >>> d = {}
        >>> set_nested_key(d, "logging.level", "debug")
        >>> d
        {'logging': {'level': 'debug'}}
    """
    parts = key_path.split(".")
    current = d

    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]

    current[parts[-1]] = value
