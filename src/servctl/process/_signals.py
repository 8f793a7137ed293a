"""Control signals understood by servers started through servctl."""

import signal
from enum import IntEnum


class ControlSignal(IntEnum):
    """Signals of the lifecycle contract.

    The target process and the controlling invocation must agree on these:
    - STOP: graceful termination requested (SIGTERM)
    - RESTART: graceful restart requested, reload in place (SIGUSR2)
    - KILL: unconditional termination, cannot be caught (SIGKILL)
    """

    STOP = signal.SIGTERM
    RESTART = signal.SIGUSR2
    KILL = signal.SIGKILL

    @property
    def signal_name(self) -> str:
        """Return the OS name of the signal, e.g. ``SIGTERM``."""
        return signal.Signals(self.value).name


# KILL cannot be caught, so servers only ever listen for these two.
CATCHABLE_SIGNALS: tuple[ControlSignal, ...] = (
    ControlSignal.STOP,
    ControlSignal.RESTART,
)
