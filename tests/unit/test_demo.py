"""Unit tests for the demo server's re-exec arguments."""

import sys

import pytest

from servctl._demo import _reexec_args  # pyright: ignore[reportPrivateUsage]

PREFIX = [sys.executable, "-m", "servctl"]


class TestReexecArgs:
    @pytest.mark.parametrize("verb", ["start", "stop", "kill", "restart"])
    def test_replaces_verb_with_start(self, verb: str) -> None:
        argv = ["servctl", "--pidfile", "/tmp/demo.pid", verb]

        assert _reexec_args(argv) == [*PREFIX, "--pidfile", "/tmp/demo.pid", "start"]

    def test_option_value_spelling_a_verb_is_kept(self) -> None:
        argv = ["servctl", "--stdout", "stop", "restart"]

        assert _reexec_args(argv) == [*PREFIX, "--stdout", "stop", "start"]

    def test_inline_option_value_is_kept(self) -> None:
        argv = ["servctl", "--stderr=kill", "restart"]

        assert _reexec_args(argv) == [*PREFIX, "--stderr=kill", "start"]

    def test_options_after_verb_are_kept(self) -> None:
        argv = ["servctl", "--devrestarter", "restart", "--stdout", "stop"]

        assert _reexec_args(argv) == [
            *PREFIX,
            "--devrestarter",
            "start",
            "--stdout",
            "stop",
        ]

    def test_verb_after_double_dash(self) -> None:
        argv = ["servctl", "--", "restart"]

        assert _reexec_args(argv) == [*PREFIX, "--", "start"]

    def test_without_verb_arguments_are_unchanged(self) -> None:
        argv = ["servctl", "--pidfile", "stop"]

        assert _reexec_args(argv) == [*PREFIX, "--pidfile", "stop"]
