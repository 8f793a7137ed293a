"""Redirection of the standard output streams to files.

Redirection happens at the file descriptor level with ``os.dup2``, so
output written by child processes and C extensions follows as well.
"""

import os
import sys
from pathlib import Path
from typing import TextIO

from servctl.exceptions import OutputRedirectError

STDOUT_FD = 1
STDERR_FD = 2


def _redirect(stream: TextIO | None, fd: int, path: Path, name: str) -> None:
    if stream is not None:
        stream.flush()

    try:
        target = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_APPEND, 0o644)
    except OSError as e:
        raise OutputRedirectError(str(e), path=path, stream=name) from e

    try:
        os.dup2(target, fd)
    except OSError as e:
        raise OutputRedirectError(str(e), path=path, stream=name) from e
    finally:
        os.close(target)


def redirect_outputs(stdout: str = "", stderr: str = "") -> None:
    """Redirect standard output and standard error to files.

    Files are created if missing and appended to otherwise. An empty path
    leaves the corresponding stream unchanged.

    Args:
        stdout: File to redirect standard output to.
        stderr: File to redirect standard error to.

    Raises:
        OutputRedirectError: If a file cannot be opened or the descriptor
            cannot be replaced.
    """
    if stdout:
        _redirect(sys.stdout, STDOUT_FD, Path(stdout), "stdout")
    if stderr:
        _redirect(sys.stderr, STDERR_FD, Path(stderr), "stderr")
