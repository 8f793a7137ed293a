"""A minimal server demonstrating the servctl lifecycle.

Run it as ``python -m servctl --pidfile /tmp/demo.pid start`` and control it
from another shell with ``stop``, ``restart`` or ``kill``. On ``restart`` the
server re-executes itself in place, keeping its pid.
"""

import os
import sys

import anyio

from servctl.cli import simple_start
from servctl.enums import Command
from servctl.process import ControlSignal, ControlSignalReceiver

# Options that never consume the following argument
_FLAG_OPTIONS = frozenset({"--devrestarter", "--no-devrestarter", "--help", "-h"})


def _reexec_args(argv: list[str]) -> list[str]:
    """Return the arguments to re-execute the server with.

    The positional verb is replaced with ``start`` so the new image does not
    try to signal itself. Option values that happen to spell a verb, as in
    ``--stdout stop``, are left alone.
    """
    args = list(argv[1:])
    takes_value = False
    options_done = False
    for i, arg in enumerate(args):
        if takes_value:
            takes_value = False
        elif arg == "--" and not options_done:
            options_done = True
        elif arg.startswith("-") and not options_done:
            takes_value = "=" not in arg and arg not in _FLAG_OPTIONS
        else:
            if arg in {c.value for c in Command}:
                args[i] = Command.START.value
            break
    return [sys.executable, "-m", "servctl", *args]


async def serve() -> None:
    """Run the demo server until it is asked to stop."""
    # Listen before the pidfile is written so no signal is missed
    with ControlSignalReceiver() as signals:
        options = simple_start(prog="servctl-demo")
        print(  # noqa: T201
            f"{options.program} running as pid {os.getpid()} "
            f"(gomaxprocs={options.gomaxprocs})",
            flush=True,
        )

        async for sig in signals:
            print(f"received {sig.signal_name}", flush=True)  # noqa: T201
            if sig is ControlSignal.STOP:
                _ = options.pidfile.remove(pid=os.getpid())
                return
            if sig is ControlSignal.RESTART:
                if options.devrestarter is not None:
                    options.devrestarter.stop(timeout=1.0)
                args = _reexec_args(sys.argv)
                os.execv(args[0], args)  # noqa: S606


def main() -> None:
    """Entry point of the demo server."""
    anyio.run(serve)
