"""Pidfile read and write.

The pidfile is the rendezvous between a started server and later
stop/kill/restart invocations: its entire contents are the decimal pid of
the running instance. There is no locking; concurrent writers race.
"""

import os
import tempfile
from pathlib import Path
from typing import final

from servctl.exceptions import (
    PidfileNotConfiguredError,
    PidfileReadError,
    PidfileWriteError,
)

# Largest value of a C pid_t; anything above cannot name a process
MAX_PID = 2**31 - 1


@final
class Pidfile:
    """A pidfile at a configured path.

    An empty path means no pidfile was configured. Writing is then a no-op
    and reading raises PidfileNotConfiguredError.
    """

    __slots__ = ("_path",)

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        """Initialize the pidfile.

        Args:
            path: Location of the pidfile. Empty or None leaves it unconfigured.
        """
        self._path: Path | None = Path(path) if path else None

    def __repr__(self) -> str:
        return f"Pidfile({str(self._path) if self._path else ''!r})"

    @property
    def path(self) -> Path | None:
        """Return the pidfile path, or None when unconfigured."""
        return self._path

    @property
    def configured(self) -> bool:
        """Return True if a pidfile path was configured."""
        return self._path is not None

    def _require_path(self) -> Path:
        if self._path is None:
            msg = "pidfile not configured"
            raise PidfileNotConfiguredError(msg)
        return self._path

    def read(self) -> int:
        """Read the pid recorded in the pidfile.

        Returns:
            The recorded process id.

        Raises:
            PidfileNotConfiguredError: If no path was configured.
            PidfileReadError: If the file is missing, unreadable, or does not
                hold a decimal pid between 1 and MAX_PID. For OS failures the
                message is the OS error text, including the path.
        """
        path = self._require_path()

        try:
            contents = path.read_text(encoding="ascii")
        except (OSError, UnicodeDecodeError) as e:
            raise PidfileReadError(str(e), path=path) from e

        text = contents.strip()
        if not text.isdigit() or not 0 < int(text) <= MAX_PID:
            msg = f"invalid pid {text!r} in pidfile {path}"
            raise PidfileReadError(msg, path=path)
        return int(text)

    def write(self, pid: int | None = None) -> bool:
        """Record a pid in the pidfile.

        The record is written to a temporary file in the same directory and
        renamed over the pidfile, so readers never see a partial record.
        Parent directories are created as needed.

        Args:
            pid: Process id to record. Defaults to the current process.

        Returns:
            True if the pidfile was written, False if none is configured.

        Raises:
            PidfileWriteError: If the pidfile cannot be written.
        """
        if self._path is None:
            return False

        path = self._path
        record = str(pid if pid is not None else os.getpid())

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="ascii") as f:
                    _ = f.write(record)
                os.chmod(tmp_name, 0o644)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PidfileWriteError(str(e), path=path) from e

        return True

    def remove(self, *, pid: int | None = None) -> bool:
        """Remove the pidfile.

        Args:
            pid: If given, only remove the pidfile while it still records
                this pid. A pidfile rewritten by a newer instance is kept.

        Returns:
            True if a pidfile was removed.
        """
        if self._path is None:
            return False

        if pid is not None:
            try:
                if self.read() != pid:
                    return False
            except PidfileReadError:
                return False

        try:
            self._path.unlink()
        except FileNotFoundError:
            return False
        return True
