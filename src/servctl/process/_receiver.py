"""Receiving side of the control signal contract.

A started server registers interest in the control signals and then waits
for them. This module bridges OS signal delivery into an async iterator
using anyio, so the server's own run loop decides how to react.
"""

import signal
from collections.abc import AsyncIterator, Iterable
from contextlib import AbstractContextManager
from types import TracebackType
from typing import Self, final

import anyio

from ._signals import CATCHABLE_SIGNALS, ControlSignal


@final
class ControlSignalReceiver:
    """Async iterator of control signals delivered to the current process.

    Must be entered from inside a running event loop on the main thread.
    Signals arriving after ``__enter__`` are queued until consumed, so a
    server should enter the receiver before writing its pidfile.

    Example:
        >>> async def main() -> None:
        ...     with ControlSignalReceiver() as signals:
        ...         options = simple_start()
        ...         async for sig in signals:
        ...             if sig is ControlSignal.STOP:
        ...                 break
    """

    __slots__ = ("_context", "_iterator", "_signals")

    def __init__(self, signals: Iterable[ControlSignal] = CATCHABLE_SIGNALS) -> None:
        """Initialize the receiver.

        Args:
            signals: Control signals to receive. Defaults to STOP and RESTART.

        Raises:
            ValueError: If KILL is requested; it cannot be caught.
        """
        self._signals: tuple[ControlSignal, ...] = tuple(signals)
        if ControlSignal.KILL in self._signals:
            msg = "SIGKILL cannot be received"
            raise ValueError(msg)
        self._context: (
            AbstractContextManager[AsyncIterator[signal.Signals]] | None
        ) = None
        self._iterator: AsyncIterator[signal.Signals] | None = None

    @property
    def signals(self) -> tuple[ControlSignal, ...]:
        """Return the control signals this receiver listens for."""
        return self._signals

    def __enter__(self) -> Self:
        self._context = anyio.open_signal_receiver(
            *(signal.Signals(sig.value) for sig in self._signals)
        )
        self._iterator = self._context.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._context is not None:
            self._context.__exit__(exc_type, exc_val, exc_tb)
        self._context = None
        self._iterator = None

    def __aiter__(self) -> Self:
        return self

    async def __anext__(self) -> ControlSignal:
        return await self.receive()

    async def receive(self) -> ControlSignal:
        """Wait for the next control signal.

        Returns:
            The control signal that was delivered.

        Raises:
            RuntimeError: If the receiver has not been entered.
        """
        if self._iterator is None:
            msg = "ControlSignalReceiver must be entered before receiving"
            raise RuntimeError(msg)
        signum = await anext(self._iterator)
        return ControlSignal(signum)
