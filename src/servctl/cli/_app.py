"""The cyclopts application parsing a server's command line."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from cyclopts import App, Parameter

from servctl.enums import Command

from ._options import Invocation

if TYPE_CHECKING:
    from rich.console import Console


def usage_line(prog: str) -> str:
    """Return the one-line usage of a program.

    Args:
        prog: Program name.

    Returns:
        The usage line, without trailing newline.
    """
    verbs = "|".join(c.value for c in Command)
    return f"Usage: {prog} [OPTIONS] {{{verbs}}}"


def create_app(
    prog: str,
    console: "Console | None" = None,  # noqa: UP037
    error_console: "Console | None" = None,  # noqa: UP037
) -> App:
    """Create the command-line application of a server.

    The default command does nothing but collect its arguments into an
    Invocation; the dispatcher decides what happens next.

    Args:
        prog: Program name shown in help and usage.
        console: Console for help output.
        error_console: Console for parse errors.

    Returns:
        The cyclopts application.
    """
    app = App(
        name=prog,
        help=f"Start, stop, kill or restart {prog}.",
        usage=usage_line(prog),
        version_flags=[],
        console=console,
        error_console=error_console,
        exit_on_error=False,
        print_error=False,
    )

    @app.default
    def _invocation(  # pyright: ignore[reportUnusedFunction]
        command: Annotated[
            str | None,
            Parameter(help="Lifecycle command: start, stop, kill or restart."),
        ] = None,
        /,
        *,
        stdout: Annotated[
            str | None, Parameter(help="file path to redirect stdout to")
        ] = None,
        stderr: Annotated[
            str | None, Parameter(help="file path to redirect stderr to")
        ] = None,
        gomaxprocs: Annotated[
            int | None,
            Parameter(
                name=["--gomaxprocs", "--maxprocs"],
                help="parallelism hint for worker pools",
            ),
        ] = None,
        devrestarter: Annotated[
            bool | None,
            Parameter(help="if true the devrestarter will be enabled"),
        ] = None,
        pidfile: Annotated[
            str | None, Parameter(help="file path holding the server's pid")
        ] = None,
        config: Annotated[
            Path | None, Parameter(help="path to a TOML config file")
        ] = None,
    ) -> Invocation:
        # Only flags given explicitly take part in the merge
        flags = {
            "stdout": stdout,
            "stderr": stderr,
            "gomaxprocs": gomaxprocs,
            "devrestarter": devrestarter,
            "pidfile": pidfile,
        }
        return Invocation(
            command=command,
            config_path=config,
            overrides={k: v for k, v in flags.items() if v is not None},
        )

    return app
