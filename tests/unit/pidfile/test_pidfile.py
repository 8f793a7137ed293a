import os
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from servctl.exceptions import (
    PidfileError,
    PidfileNotConfiguredError,
    PidfileReadError,
    PidfileWriteError,
)
from servctl.pidfile import MAX_PID, Pidfile


class TestConfiguration:
    @pytest.mark.parametrize("path", [None, ""])
    def test_empty_path_is_unconfigured(self, path: str | None) -> None:
        pidfile = Pidfile(path)

        assert not pidfile.configured
        assert pidfile.path is None

    def test_accepts_path_like(self, pidfile_path: Path) -> None:
        pidfile = Pidfile(pidfile_path)

        assert pidfile.configured
        assert pidfile.path == pidfile_path

    def test_repr_shows_path(self) -> None:
        assert repr(Pidfile("/run/app.pid")) == "Pidfile('/run/app.pid')"


class TestWrite:
    def test_writes_current_pid_by_default(self, pidfile_path: Path) -> None:
        assert Pidfile(pidfile_path).write()

        assert pidfile_path.read_text() == str(os.getpid())

    def test_writes_given_pid_without_newline(self, pidfile_path: Path) -> None:
        _ = Pidfile(pidfile_path).write(4242)

        assert pidfile_path.read_text() == "4242"

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "a" / "b" / "c" / "server.pid"

        _ = Pidfile(path).write(4242)

        assert path.read_text() == "4242"

    def test_replaces_existing_record(self, pidfile_path: Path) -> None:
        pidfile = Pidfile(pidfile_path)
        _ = pidfile.write(1111)

        _ = pidfile.write(2222)

        assert pidfile.read() == 2222

    def test_leaves_no_temporary_files(self, pidfile_path: Path) -> None:
        _ = Pidfile(pidfile_path).write(4242)

        assert [p.name for p in pidfile_path.parent.iterdir()] == ["server.pid"]

    def test_unconfigured_write_is_noop(self, tmp_path: Path) -> None:
        assert not Pidfile().write(4242)

        assert list(tmp_path.iterdir()) == []

    def test_failure_raises_pidfile_write_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        _ = blocker.write_text("not a directory")
        path = blocker / "server.pid"

        with pytest.raises(PidfileWriteError) as exc_info:
            _ = Pidfile(path).write(4242)

        assert exc_info.value.path == path
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_failed_rename_removes_temporary_file(
        self, pidfile_path: Path, mocker: MockerFixture
    ) -> None:
        _ = mocker.patch(
            "servctl.pidfile._pidfile.os.replace",
            side_effect=OSError(28, "No space left on device"),
        )

        with pytest.raises(PidfileWriteError, match="No space left on device"):
            _ = Pidfile(pidfile_path).write(4242)

        assert list(pidfile_path.parent.iterdir()) == []


class TestRead:
    def test_reads_recorded_pid(self, pidfile_path: Path) -> None:
        pidfile_path.parent.mkdir(parents=True)
        _ = pidfile_path.write_text("4242")

        assert Pidfile(pidfile_path).read() == 4242

    @pytest.mark.parametrize("contents", ["4242\n", "4242\r\n", "  4242  \n"])
    def test_tolerates_surrounding_whitespace(
        self, pidfile_path: Path, contents: str
    ) -> None:
        pidfile_path.parent.mkdir(parents=True)
        _ = pidfile_path.write_text(contents)

        assert Pidfile(pidfile_path).read() == 4242

    def test_missing_file_error_is_os_text(self, pidfile_path: Path) -> None:
        with pytest.raises(PidfileReadError) as exc_info:
            _ = Pidfile(pidfile_path).read()

        assert str(exc_info.value) == (
            f"[Errno 2] No such file or directory: '{pidfile_path}'"
        )
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    @pytest.mark.parametrize("contents", ["", "abc", "42abc", "-5", "0", "4.2"])
    def test_rejects_invalid_record(self, pidfile_path: Path, contents: str) -> None:
        pidfile_path.parent.mkdir(parents=True)
        _ = pidfile_path.write_text(contents)

        with pytest.raises(PidfileReadError, match="invalid pid"):
            _ = Pidfile(pidfile_path).read()

    @pytest.mark.parametrize("contents", ["2147483648", "99999999999999999999"])
    def test_rejects_pid_beyond_pid_range(
        self, pidfile_path: Path, contents: str
    ) -> None:
        pidfile_path.parent.mkdir(parents=True)
        _ = pidfile_path.write_text(contents)

        with pytest.raises(PidfileReadError, match="invalid pid"):
            _ = Pidfile(pidfile_path).read()

    def test_accepts_largest_pid(self, pidfile_path: Path) -> None:
        pidfile_path.parent.mkdir(parents=True)
        _ = pidfile_path.write_text(str(MAX_PID))

        assert Pidfile(pidfile_path).read() == MAX_PID

    def test_rejects_non_ascii_record(self, pidfile_path: Path) -> None:
        pidfile_path.parent.mkdir(parents=True)
        _ = pidfile_path.write_bytes(b"\xff\xfe")

        with pytest.raises(PidfileReadError):
            _ = Pidfile(pidfile_path).read()

    def test_unconfigured_read_raises(self) -> None:
        with pytest.raises(PidfileNotConfiguredError, match="pidfile not configured"):
            _ = Pidfile().read()

    def test_read_errors_share_base_class(self) -> None:
        assert issubclass(PidfileNotConfiguredError, PidfileError)
        assert issubclass(PidfileReadError, PidfileError)


class TestRemove:
    def test_removes_pidfile(self, pidfile_path: Path) -> None:
        pidfile = Pidfile(pidfile_path)
        _ = pidfile.write(4242)

        assert pidfile.remove()

        assert not pidfile_path.exists()

    def test_missing_pidfile_returns_false(self, pidfile_path: Path) -> None:
        assert not Pidfile(pidfile_path).remove()

    def test_unconfigured_returns_false(self) -> None:
        assert not Pidfile().remove()

    def test_removes_when_pid_matches(self, pidfile_path: Path) -> None:
        pidfile = Pidfile(pidfile_path)
        _ = pidfile.write(4242)

        assert pidfile.remove(pid=4242)

        assert not pidfile_path.exists()

    def test_keeps_record_of_another_instance(self, pidfile_path: Path) -> None:
        pidfile = Pidfile(pidfile_path)
        _ = pidfile.write(5555)

        assert not pidfile.remove(pid=4242)

        assert pidfile.read() == 5555

    def test_keeps_garbled_record_when_pid_given(self, pidfile_path: Path) -> None:
        pidfile_path.parent.mkdir(parents=True)
        _ = pidfile_path.write_text("garbage")

        assert not Pidfile(pidfile_path).remove(pid=4242)

        assert pidfile_path.exists()
