"""Command-line lifecycle dispatch for servctl-managed servers."""

from ._app import create_app, usage_line
from ._dispatch import Dispatcher, resolve_command, simple_start
from ._options import Invocation, StartupOptions
from ._shared import ExitCode

__all__ = [
    "Dispatcher",
    "ExitCode",
    "Invocation",
    "StartupOptions",
    "create_app",
    "resolve_command",
    "simple_start",
    "usage_line",
]
