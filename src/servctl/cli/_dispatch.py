# pyright: reportAny=false
"""Lifecycle dispatch.

One dispatch per invocation: parse the command line, load configuration,
then either signal the process recorded in the pidfile or initialize the
current process as a freshly started server.

Only ``start`` (and a ``restart`` that falls back to a fresh start) return
to the caller. Every other path ends the process with an exit code.
"""

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Never, final

from cyclopts import CycloptsError

from servctl.config import DEFAULT_ENV_PREFIX, Config
from servctl.devrestart import DevRestarter
from servctl.enums import Command
from servctl.exceptions import (
    ConfigError,
    InitializationError,
    PidfileError,
    SignalDeliveryError,
    UsageError,
)
from servctl.pidfile import Pidfile
from servctl.process import ProcessHandle
from servctl.utils import create_cli_logger, get_program_name, redirect_outputs

from ._app import create_app
from ._options import Invocation, StartupOptions
from ._shared import (
    ExitCode,
    exit_with_error,
    exit_with_success,
    get_console,
    get_error_console,
    print_plain,
)

if TYPE_CHECKING:
    from cyclopts import App
    from rich.console import Console
    from structlog.typing import FilteringBoundLogger

# Errors after which `restart` gives up on the running instance
_RESTART_FALLBACK_ERRORS = (PidfileError, ProcessLookupError, SignalDeliveryError)


def resolve_command(verb: str | None) -> Command:
    """Map the positional verb to a Command.

    Raises:
        UsageError: If the verb is missing or not a known command.
    """
    if verb is None:
        msg = "no command was specified"
        raise UsageError(msg)
    try:
        return Command(verb)
    except ValueError:
        msg = f"unknown command: {verb}"
        raise UsageError(msg) from None


@final
class Dispatcher:
    """Runs one lifecycle command for a server program."""

    __slots__ = (
        "_app",
        "_console",
        "_env_prefix",
        "_environ",
        "_error_console",
        "_prog",
    )

    def __init__(
        self,
        prog: str | None = None,
        *,
        env_prefix: str = DEFAULT_ENV_PREFIX,
        environ: Mapping[str, str] | None = None,
        console: "Console | None" = None,  # noqa: UP037
        error_console: "Console | None" = None,  # noqa: UP037
    ) -> None:
        """Initialize the dispatcher.

        Args:
            prog: Program name. Defaults to the base name of ``sys.argv[0]``.
            env_prefix: Prefix of environment variables to read.
            environ: Environment to read. Defaults to ``os.environ``.
            console: Console for standard output.
            error_console: Console for standard error.
        """
        self._prog: str = prog or get_program_name()
        self._env_prefix: str = env_prefix
        self._environ: Mapping[str, str] | None = environ
        self._console: Console = console or get_console()
        self._error_console: Console = error_console or get_error_console()
        self._app: App = create_app(
            self._prog, console=self._console, error_console=self._error_console
        )

    @property
    def prog(self) -> str:
        """Return the program name used in messages."""
        return self._prog

    def run(self, tokens: Sequence[str] | None = None) -> StartupOptions:
        """Dispatch the command given on the command line.

        Args:
            tokens: Command-line arguments. Defaults to ``sys.argv[1:]``.

        Returns:
            The startup options, when the current process should run as the
            server.

        Raises:
            SystemExit: For every command other than a start, and on errors.
        """
        try:
            invocation = self.parse(tokens)
            command = resolve_command(invocation.command)
        except UsageError as e:
            self._usage_error(str(e))

        try:
            config = Config.load(
                config_path=invocation.config_path,
                env_prefix=self._env_prefix,
                environ=self._environ,
                cli_overrides=invocation.overrides,
            )
        except ConfigError as e:
            exit_with_error(str(e), console=self._error_console)

        logger = create_cli_logger(
            level=config.logging.level.value,
            log_format=config.logging.format.value,  # type: ignore[arg-type]
            log_file=config.logging.file,
            program=self._prog,
        )
        logger.debug(
            "dispatch",
            command=command.value,
            sources=[s.name.value for s in config.sources if s.values],
        )
        pidfile = Pidfile(config.pidfile)

        match command:
            case Command.START:
                return self.prestart(config, pidfile, logger)
            case Command.STOP:
                self._signal(pidfile, logger, ProcessHandle.stop, command)
            case Command.KILL:
                self._signal(pidfile, logger, ProcessHandle.kill, command)
            case Command.RESTART:
                return self._restart(config, pidfile, logger)

    def parse(self, tokens: Sequence[str] | None = None) -> Invocation:
        """Parse the command line.

        Args:
            tokens: Command-line arguments. Defaults to ``sys.argv[1:]``.

        Returns:
            The parsed invocation.

        Raises:
            UsageError: If the options are malformed.
            SystemExit: With SUCCESS after printing the help page.
        """
        try:
            command, bound, _ = self._app.parse_args(
                tokens,
                console=self._console,
                error_console=self._error_console,
                print_error=False,
                exit_on_error=False,
            )
        except CycloptsError as e:
            raise UsageError(str(e)) from e

        result = command(*bound.args, **bound.kwargs)
        if not isinstance(result, Invocation):
            # --help was handled by cyclopts
            exit_with_success()
        return result

    def prestart(
        self,
        config: Config,
        pidfile: Pidfile,
        logger: "FilteringBoundLogger",  # noqa: UP037
        *,
        restarted: bool = False,
    ) -> StartupOptions:
        """Initialize the current process as a freshly started server.

        Steps run in order: enable the dev restarter, redirect the output
        streams, write the pidfile. The first failure ends the process.

        Args:
            config: The resolved configuration.
            pidfile: The pidfile to record the current pid in.
            logger: Logger for lifecycle events.
            restarted: Whether this start is the fallback of a restart.

        Returns:
            The startup options handed back to the server.

        Raises:
            SystemExit: With RUNTIME_ERROR if any step fails.
        """
        devrestarter: DevRestarter | None = None
        try:
            if config.devrestarter:
                devrestarter = DevRestarter(config.devrestarter_watch, logger=logger)
                devrestarter.start()
            redirect_outputs(config.stdout, config.stderr)
            written = pidfile.write()
        except (InitializationError, OSError) as e:
            logger.error("start_failed", error=str(e))
            if devrestarter is not None:
                devrestarter.stop(timeout=1.0)
            exit_with_error(str(e), console=self._error_console)

        logger.info(
            "started",
            pidfile=str(pidfile.path) if written else None,
            gomaxprocs=config.gomaxprocs,
            devrestarter=devrestarter is not None,
            restarted=restarted,
        )
        return StartupOptions(
            program=self._prog,
            config=config,
            pidfile=pidfile,
            gomaxprocs=config.gomaxprocs,
            devrestarter=devrestarter,
            logger=logger,
            restarted=restarted,
        )

    def _usage_error(self, message: str) -> Never:
        print_plain(self._error_console, message)
        self._app.help_print([], console=self._error_console)
        raise SystemExit(ExitCode.USAGE_ERROR)

    def _signal(
        self,
        pidfile: Pidfile,
        logger: "FilteringBoundLogger",  # noqa: UP037
        operation: "Callable[[ProcessHandle], None]",  # noqa: UP037
        command: Command,
    ) -> Never:
        try:
            handle = ProcessHandle(pidfile.read())
            operation(handle)
        except (PidfileError, ProcessLookupError, SignalDeliveryError) as e:
            logger.error("signal_failed", command=command.value, error=str(e))
            exit_with_error(str(e), console=self._error_console)

        logger.info("signal_sent", command=command.value, pid=handle.pid)
        exit_with_success()

    def _restart(
        self,
        config: Config,
        pidfile: Pidfile,
        logger: "FilteringBoundLogger",  # noqa: UP037
    ) -> StartupOptions:
        try:
            handle = ProcessHandle(pidfile.read())
            handle.restart()
        except _RESTART_FALLBACK_ERRORS as e:
            logger.warning("restart_fallback", error=str(e))
            print_plain(
                self._console, f"{self._prog} restart error: {e}. trying fresh start."
            )
            return self.prestart(config, pidfile, logger, restarted=True)

        logger.info("signal_sent", command=Command.RESTART.value, pid=handle.pid)
        exit_with_success()


def simple_start(
    prog: str | None = None,
    *,
    tokens: Sequence[str] | None = None,
    env_prefix: str = DEFAULT_ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
    console: "Console | None" = None,  # noqa: UP037
    error_console: "Console | None" = None,  # noqa: UP037
) -> StartupOptions:
    """Run the standard startup procedure of a server.

    Call this at the top of a server's entry point. It handles flag,
    environment and config file parsing, and the stop, kill and restart
    commands by signalling the instance recorded in the pidfile and exiting.
    It only returns when the current process should run as the server: on
    ``start``, or when ``restart`` found no instance to signal.

    Args:
        prog: Program name. Defaults to the base name of ``sys.argv[0]``.
        tokens: Command-line arguments. Defaults to ``sys.argv[1:]``.
        env_prefix: Prefix of environment variables to read.
        environ: Environment to read. Defaults to ``os.environ``.
        console: Console for standard output.
        error_console: Console for standard error.

    Returns:
        The startup options for the server.

    Raises:
        SystemExit: For every command other than a start, and on errors.

    Example:
        >>> def main() -> None:
        ...     options = simple_start()
        ...     serve(workers=options.gomaxprocs)
    """
    dispatcher = Dispatcher(
        prog,
        env_prefix=env_prefix,
        environ=environ,
        console=console,
        error_console=error_console,
    )
    return dispatcher.run(tokens)
