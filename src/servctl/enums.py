"""Enumeration types for servctl."""

from enum import StrEnum


class Command(StrEnum):
    """Lifecycle verbs accepted on the command line."""

    START = "start"
    STOP = "stop"
    KILL = "kill"
    RESTART = "restart"
