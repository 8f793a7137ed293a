import os
import subprocess
import sys
import time
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

HARNESS = Path(__file__).parent / "harness.py"


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


def harness_env(count: int = 0, **extra: str) -> dict[str, str]:
    """Return a clean environment for running the harness server.

    Args:
        count: Number of control signals the server waits for.
        **extra: Additional environment variables.
    """
    env = {k: v for k, v in os.environ.items() if not k.startswith("SERVCTL_")}
    env["COUNT"] = str(count)
    env["PYTHONUNBUFFERED"] = "1"
    env.update(extra)
    return env


def run_harness(
    *args: str, count: int = 0, timeout: float = 30, **extra: str
) -> subprocess.CompletedProcess[str]:
    """Run the harness server to completion."""
    return subprocess.run(  # noqa: S603 - Safe: running our own test server
        [sys.executable, str(HARNESS), *args],
        capture_output=True,
        text=True,
        env=harness_env(count, **extra),
        check=False,
        timeout=timeout,
    )


def wait_for_pidfile(path: Path, pid: int, timeout: float = 30) -> None:
    """Wait until the pidfile records the given pid.

    Raises:
        TimeoutError: If the record does not appear in time.
    """
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            if path.read_text() == str(pid):
                return
        except FileNotFoundError:
            pass
        time.sleep(0.05)
    msg = f"pidfile {path} never recorded pid {pid}"
    raise TimeoutError(msg)


@pytest.fixture
def spawn_harness() -> Iterator[Callable[..., subprocess.Popen[str]]]:
    """Start harness servers in the background, killing leftovers afterwards."""
    procs: list[subprocess.Popen[str]] = []

    def _spawn(*args: str, count: int = 0, **extra: str) -> subprocess.Popen[str]:
        proc = subprocess.Popen(  # noqa: S603 - Safe: running our own test server
            [sys.executable, str(HARNESS), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            env=harness_env(count, **extra),
        )
        procs.append(proc)
        return proc

    yield _spawn

    for proc in procs:
        if proc.poll() is None:
            proc.kill()
        _ = proc.communicate()
