"""Development auto-restart.

A watchfiles-based watcher that runs in a daemon thread and sends the
graceful-restart signal to a process whenever watched source files change.
The server reacts to the signal exactly as it would to ``restart``.
"""

import errno
import os
import threading
from collections.abc import Iterable
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING, Self, final

from watchfiles import BaseFilter, Change, PythonFilter, watch

from servctl.exceptions import SignalDeliveryError
from servctl.process import ProcessHandle, current_process
from servctl.utils import create_null_logger, get_script_dir

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

DEFAULT_DEBOUNCE_MS = 1600


def format_change(change: Change, path: str) -> str:
    """Format a file change event as a string.

    Args:
        change: The type of change (added, modified, deleted).
        path: The path to the changed file.

    Returns:
        A formatted string describing the change.
    """
    return f"{change.name}: {path}"


@final
class DevRestarter:
    """Restarts a process when its source files change.

    Each batch of changes reported by watchfiles results in exactly one
    ``restart()`` on the handle. Delivery failures are logged and watching
    continues.
    """

    __slots__ = (
        "_debounce",
        "_handle",
        "_logger",
        "_paths",
        "_stop_event",
        "_thread",
        "_watch_filter",
    )

    def __init__(
        self,
        paths: Iterable[str | os.PathLike[str]] = (),
        *,
        handle: ProcessHandle | None = None,
        watch_filter: BaseFilter | None = None,
        debounce: int = DEFAULT_DEBOUNCE_MS,
        logger: "FilteringBoundLogger | None" = None,  # noqa: UP037
    ) -> None:
        """Initialize the restarter.

        Args:
            paths: Files or directories to watch. Defaults to the directory of
                the running program's entry script.
            handle: Process to restart. Defaults to the current process.
            watch_filter: Filter deciding which changes count. Defaults to
                Python source files.
            debounce: Milliseconds to group changes into one batch.
            logger: Logger for watcher activity.
        """
        self._paths: tuple[Path, ...] = tuple(Path(p) for p in paths) or (
            get_script_dir(),
        )
        self._handle: ProcessHandle = handle or current_process()
        self._watch_filter: BaseFilter = watch_filter or PythonFilter()
        self._debounce: int = debounce
        self._logger: FilteringBoundLogger = logger or create_null_logger()
        self._stop_event: threading.Event = threading.Event()
        self._thread: threading.Thread | None = None

    def __repr__(self) -> str:
        paths = ", ".join(str(p) for p in self._paths)
        return f"DevRestarter(paths=[{paths}], pid={self._handle.pid})"

    @property
    def paths(self) -> tuple[Path, ...]:
        """Return the watched paths."""
        return self._paths

    @property
    def handle(self) -> ProcessHandle:
        """Return the handle of the process being restarted."""
        return self._handle

    @property
    def running(self) -> bool:
        """Return True while the watcher thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start watching in a daemon thread.

        Raises:
            RuntimeError: If the restarter is already running.
            FileNotFoundError: If a watched path does not exist.
        """
        if self.running:
            msg = "DevRestarter is already running"
            raise RuntimeError(msg)

        for path in self._paths:
            if not path.exists():
                raise FileNotFoundError(
                    errno.ENOENT, os.strerror(errno.ENOENT), str(path)
                )

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="servctl-devrestarter", daemon=True
        )
        self._thread.start()
        self._logger.info(
            "devrestarter_started",
            paths=[str(p) for p in self._paths],
            pid=self._handle.pid,
        )

    def stop(self, timeout: float | None = None) -> None:
        """Stop watching and wait for the watcher thread to finish.

        Args:
            timeout: Seconds to wait for the thread. None waits indefinitely.
        """
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        self._logger.info("devrestarter_stopped")

    def __enter__(self) -> Self:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.stop()

    def _run(self) -> None:
        for changes in watch(
            *self._paths,
            watch_filter=self._watch_filter,
            debounce=self._debounce,
            stop_event=self._stop_event,
            raise_interrupt=False,
        ):
            self._logger.info(
                "devrestarter_changes",
                changes=sorted(format_change(c, p) for c, p in changes),
            )
            try:
                self._handle.restart()
            except (ProcessLookupError, SignalDeliveryError) as e:
                self._logger.error(
                    "devrestarter_restart_failed", pid=self._handle.pid, error=str(e)
                )
