"""Pidfile access for servctl.

Example:
    >>> from servctl.pidfile import Pidfile
    >>> pidfile = Pidfile("/run/myserver.pid")
    >>> pidfile.write()
    True
    >>> pidfile.read()
    4242
"""

from ._pidfile import MAX_PID, Pidfile

__all__ = ["MAX_PID", "Pidfile"]
