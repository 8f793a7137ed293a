# ruff: noqa: TC003  # Path needed at runtime for dataclass fields
"""Values produced by command-line parsing and by a successful start."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from servctl.config import Config
from servctl.devrestart import DevRestarter
from servctl.pidfile import Pidfile

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


@dataclass(frozen=True, slots=True)
class Invocation:
    """The parsed command line.

    Attributes:
        command: The verb as typed, or None when missing.
        config_path: Value of the --config flag.
        overrides: Configuration values given explicitly as flags.
    """

    command: str | None
    config_path: Path | None = None
    overrides: dict[str, Any] = field(  # pyright: ignore[reportExplicitAny]
        default_factory=dict
    )


@dataclass(frozen=True, slots=True)
class StartupOptions:
    """Result of a successful start, handed back to the server.

    Attributes:
        program: Base name of the program.
        config: The resolved configuration.
        pidfile: The pidfile written during start.
        gomaxprocs: Parallelism hint for sizing worker pools.
        devrestarter: The active dev restarter, or None when disabled.
        logger: Structured logger configured from the logging section.
        restarted: True if this start is the fallback of a failed restart.
    """

    program: str
    config: Config = field(repr=False)
    pidfile: Pidfile
    gomaxprocs: int
    devrestarter: DevRestarter | None = None
    logger: "FilteringBoundLogger | None" = field(  # noqa: UP037
        default=None, repr=False
    )
    restarted: bool = False
