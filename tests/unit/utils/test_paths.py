import sys
from pathlib import Path

import pytest

from servctl.utils import get_program_name, get_script_dir


class TestGetProgramName:
    def test_returns_base_name_of_argv0(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "argv", ["/usr/local/bin/myserver", "start"])

        assert get_program_name() == "myserver"

    def test_falls_back_without_argv0(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "argv", [""])

        assert get_program_name() == "server"


class TestGetScriptDir:
    def test_returns_directory_of_entry_script(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        script = tmp_path / "app" / "main.py"
        monkeypatch.setattr(sys, "argv", [str(script)])

        assert get_script_dir() == script.resolve().parent

    def test_falls_back_to_cwd(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setattr(sys, "argv", [])
        monkeypatch.chdir(tmp_path)

        assert get_script_dir() == Path.cwd()
