"""Process control for servers started through servctl.

Key Components:
    - ProcessHandle: Delivers stop, restart and kill signals to a pid
    - current_process: Handle for the running process
    - ControlSignal: The signals of the lifecycle contract
    - ControlSignalReceiver: Async iterator of received control signals

Example:
    >>> from servctl.process import ProcessHandle
    >>> ProcessHandle(4242).stop()
"""

from ._handle import ProcessHandle, current_process
from ._receiver import ControlSignalReceiver
from ._signals import CATCHABLE_SIGNALS, ControlSignal

__all__ = [
    "CATCHABLE_SIGNALS",
    "ControlSignal",
    "ControlSignalReceiver",
    "ProcessHandle",
    "current_process",
]
