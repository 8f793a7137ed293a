"""Process handle for delivering control signals by pid.

This module provides the ProcessHandle value type and the handle for the
current process.
"""

import functools
import os
from dataclasses import dataclass

from servctl.exceptions import SignalDeliveryError

from ._signals import ControlSignal


@dataclass(frozen=True, slots=True)
class ProcessHandle:
    """Capability to address a single OS process by id.

    Handles carry no state beyond the pid. Every operation is a single
    signal delivery that returns as soon as the OS accepts the signal; none
    of them wait for the target to react.

    Attributes:
        pid: The process id. Must be positive.
    """

    pid: int

    def __post_init__(self) -> None:
        # 0 and negative pids address process groups in kill(2)
        if self.pid <= 0:
            msg = f"invalid pid {self.pid}: must be a positive integer"
            raise ValueError(msg)

    def stop(self) -> None:
        """Ask the process to terminate gracefully.

        Raises:
            ProcessLookupError: If no process with this pid exists.
            SignalDeliveryError: If the OS refuses delivery for another reason.
        """
        self.send(ControlSignal.STOP)

    def restart(self) -> None:
        """Ask the process to restart gracefully, reloading in place.

        Raises:
            ProcessLookupError: If no process with this pid exists.
            SignalDeliveryError: If the OS refuses delivery for another reason.
        """
        self.send(ControlSignal.RESTART)

    def kill(self) -> None:
        """Terminate the process unconditionally.

        Raises:
            ProcessLookupError: If no process with this pid exists.
            SignalDeliveryError: If the OS refuses delivery for another reason.
        """
        self.send(ControlSignal.KILL)

    def send(self, sig: ControlSignal) -> None:
        """Deliver a control signal to the process.

        Args:
            sig: The control signal to deliver.

        Raises:
            ProcessLookupError: If no process with this pid exists.
            SignalDeliveryError: If the OS refuses delivery for another reason.
        """
        try:
            os.kill(self.pid, sig.value)
        except ProcessLookupError:
            raise
        except OSError as e:
            raise SignalDeliveryError(
                str(e), pid=self.pid, signal=sig.value, cause=e
            ) from e


@functools.cache
def _handle_for(pid: int) -> ProcessHandle:
    return ProcessHandle(pid)


def current_process() -> ProcessHandle:
    """Return the handle for the current process.

    The handle is built once per pid, so a forked child gets its own.
    """
    return _handle_for(os.getpid())
