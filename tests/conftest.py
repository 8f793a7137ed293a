"""Shared test fixtures for servctl tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def error_console() -> Console:
    return Console(
        stderr=True,
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def pidfile_path(tmp_path: Path) -> Path:
    """Return a pidfile location that does not exist yet."""
    return tmp_path / "run" / "server.pid"


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    """Return a function writing TOML content to a config file."""

    def _write(content: str) -> Path:
        path = tmp_path / "conf" / "servctl.toml"
        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_text(content)
        return path

    return _write
