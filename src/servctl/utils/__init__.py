"""Utilities used across servctl."""

from ._logging import LogFormatType, create_cli_logger, create_null_logger
from ._paths import get_program_name, get_script_dir
from ._redirect import redirect_outputs

__all__ = [
    "LogFormatType",
    "create_cli_logger",
    "create_null_logger",
    "get_program_name",
    "get_script_dir",
    "redirect_outputs",
]
