"""servctl exceptions."""

from pathlib import Path
from typing import Any


class ServctlError(Exception):
    """Base exception for servctl errors."""


class UsageError(ServctlError):
    """Raised when the command line cannot be turned into a command.

    Covers a missing verb, an unknown verb and malformed options.
    """


# =============================================================================
# Process Exceptions
# =============================================================================


class SignalDeliveryError(ServctlError, OSError):
    """Raised when the OS refuses to deliver a signal to a process.

    A missing process is reported with the builtin ``ProcessLookupError``
    instead; this covers everything else, such as permission denied.

    Attributes:
        pid: The process the signal was addressed to.
        signal: The signal number that was refused.
        cause: The underlying OS error.
    """

    def __init__(
        self,
        message: str,
        *,
        pid: int | None = None,
        signal: int | None = None,
        cause: OSError | None = None,
    ) -> None:
        """Initialize with error message and delivery context.

        Args:
            message: Human-readable error message.
            pid: The process the signal was addressed to.
            signal: The signal number that was refused.
            cause: The underlying OS error.
        """
        super().__init__(message)
        self.pid: int | None = pid
        self.signal: int | None = signal
        self.cause: OSError | None = cause


# =============================================================================
# Startup Exceptions
# =============================================================================


class InitializationError(ServctlError):
    """Base exception for failures while initializing a started process."""


class OutputRedirectError(InitializationError):
    """Raised when stdout or stderr cannot be redirected to a file.

    Attributes:
        path: The file the stream was to be redirected to.
        stream: Name of the stream, "stdout" or "stderr".
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        stream: str | None = None,
    ) -> None:
        """Initialize with error message and redirect context."""
        super().__init__(message)
        self.path: Path | None = path
        self.stream: str | None = stream


# =============================================================================
# Pidfile Exceptions
# =============================================================================


class PidfileError(ServctlError):
    """Base exception for pidfile errors.

    Attributes:
        path: The pidfile path, or None when no path was configured.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialize with error message and pidfile path.

        Args:
            message: Human-readable error message.
            path: The pidfile path involved.
        """
        super().__init__(message)
        self.path: Path | None = path


class PidfileNotConfiguredError(PidfileError):
    """Raised when a pidfile is read but no pidfile path was configured."""


class PidfileReadError(PidfileError):
    """Raised when the pidfile is missing, unreadable or garbled.

    The message is the underlying error text, verbatim.
    """


class PidfileWriteError(PidfileError, InitializationError):
    """Raised when the pidfile cannot be written during startup."""


# =============================================================================
# Config Exceptions
# =============================================================================


class ConfigError(ServctlError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
