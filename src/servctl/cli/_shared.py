"""Shared CLI utilities for the lifecycle dispatcher.

This module provides common utilities used by the dispatcher:
- Standardized exit codes
- Console utilities for plain, undecorated output
"""

from enum import IntEnum
from typing import Never

from rich.console import Console

__all__ = [
    "ExitCode",
    "exit_with_error",
    "exit_with_success",
    "get_console",
    "get_error_console",
    "print_plain",
]


class ExitCode(IntEnum):
    """Exit codes of a servctl-managed program."""

    SUCCESS = 0
    USAGE_ERROR = 1
    RUNTIME_ERROR = 2


def get_console() -> Console:
    """Get a Rich console for standard output.

    Returns:
        Console instance writing to stdout.
    """
    return Console()


def get_error_console() -> Console:
    """Get a Rich console configured for error output to stderr.

    Returns:
        Console instance writing to stderr.
    """
    return Console(stderr=True)


def print_plain(console: Console, text: str, *, end: str = "\n") -> None:
    """Print text exactly as given.

    Markup, emoji codes, highlighting and wrapping are disabled, so error
    text containing brackets, colons or long paths reaches the stream
    unchanged.

    Args:
        console: The console to print to.
        text: The text to print.
        end: String appended after the text.
    """
    console.print(
        text, end=end, markup=False, highlight=False, emoji=False, soft_wrap=True
    )


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.RUNTIME_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Print an error message and exit with the specified code.

    The message is printed without decoration or trailing newline.

    Args:
        message: The error message to display.
        code: The exit code to use (defaults to RUNTIME_ERROR).
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    print_plain(console, message, end="")
    raise SystemExit(code)


def exit_with_success() -> Never:
    """Exit with SUCCESS code without printing anything.

    Raises:
        SystemExit: Always raised with ExitCode.SUCCESS (0).
    """
    raise SystemExit(ExitCode.SUCCESS)
