"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.
"""

import os
from typing import Any


def available_cpus() -> int:
    """Return the number of processor cores available to this process."""
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0)) or 1
    return os.cpu_count() or 1


DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "stdout": "",
    "stderr": "",
    "pidfile": "",
    "gomaxprocs": available_cpus(),
    "devrestarter": False,
    "devrestarter_watch": [],
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
}

DEFAULT_ENV_PREFIX = "SERVCTL_"
"""Prefix of environment variables that override configuration values."""
