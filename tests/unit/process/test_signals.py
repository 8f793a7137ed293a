import signal

from servctl.process import CATCHABLE_SIGNALS, ControlSignal


class TestControlSignal:
    def test_values_match_os_signals(self) -> None:
        assert ControlSignal.STOP == signal.SIGTERM
        assert ControlSignal.RESTART == signal.SIGUSR2
        assert ControlSignal.KILL == signal.SIGKILL

    def test_signal_name(self) -> None:
        assert ControlSignal.STOP.signal_name == "SIGTERM"
        assert ControlSignal.RESTART.signal_name == "SIGUSR2"
        assert ControlSignal.KILL.signal_name == "SIGKILL"

    def test_catchable_signals_exclude_kill(self) -> None:
        assert ControlSignal.KILL not in CATCHABLE_SIGNALS
        assert set(CATCHABLE_SIGNALS) == {ControlSignal.STOP, ControlSignal.RESTART}
