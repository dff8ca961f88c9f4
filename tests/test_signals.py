"""Tests for the signal controller."""

from __future__ import annotations

import os
import signal

from smallsh.core.signals import (
    SignalController,
    apply_child_dispositions,
    child_signals_blocked,
)


def _sigchld_blocked() -> bool:
    return signal.SIGCHLD in signal.pthread_sigmask(signal.SIG_BLOCK, [])


class TestForegroundOnlyToggle:
    def test_first_stop_request_enters_mode(self, shell_state, read_output):
        controller = SignalController(shell_state)
        controller.handle_stop_request(signal.SIGTSTP, None)
        assert shell_state.foreground_only
        assert read_output() == "Entering foreground-only mode (& is now ignored)\n"

    def test_toggle_twice_restores_mode(self, shell_state, read_output):
        controller = SignalController(shell_state)
        controller.handle_stop_request(signal.SIGTSTP, None)
        controller.handle_stop_request(signal.SIGTSTP, None)
        assert not shell_state.foreground_only
        assert read_output() == (
            "Entering foreground-only mode (& is now ignored)\n"
            "Exiting foreground-only mode\n"
        )


class TestShellDispositions:
    def test_install_and_restore(self, shell_state, restore_signals):
        controller = SignalController(shell_state)
        signal.signal(signal.SIGINT, signal.default_int_handler)

        def reaper(signum, frame):
            pass

        controller.install(reaper)
        assert signal.getsignal(signal.SIGINT) is signal.SIG_IGN
        assert signal.getsignal(signal.SIGTSTP) == controller.handle_stop_request
        assert signal.getsignal(signal.SIGCHLD) is reaper

        controller.restore()
        assert signal.getsignal(signal.SIGINT) is signal.default_int_handler
        assert signal.getsignal(signal.SIGCHLD) is not reaper

    def test_delivered_sigtstp_toggles(self, shell_state, read_output, restore_signals):
        controller = SignalController(shell_state)
        controller.install(lambda signum, frame: None)
        os.kill(os.getpid(), signal.SIGTSTP)
        controller.restore()
        assert shell_state.foreground_only
        assert "Entering foreground-only mode" in read_output()


class TestChildSignalMask:
    def test_blocked_only_inside_block(self, restore_signals):
        assert not _sigchld_blocked()
        with child_signals_blocked():
            assert _sigchld_blocked()
        assert not _sigchld_blocked()

    def test_unblocked_after_exception(self, restore_signals):
        try:
            with child_signals_blocked():
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert not _sigchld_blocked()


class TestChildDispositions:
    def test_foreground_child(self, restore_signals):
        with child_signals_blocked():
            apply_child_dispositions(background=False)
            assert not _sigchld_blocked()
        assert signal.getsignal(signal.SIGINT) is signal.SIG_DFL
        assert signal.getsignal(signal.SIGTSTP) is signal.SIG_IGN

    def test_background_child(self, restore_signals):
        apply_child_dispositions(background=True)
        assert signal.getsignal(signal.SIGINT) is signal.SIG_IGN
        assert signal.getsignal(signal.SIGTSTP) is signal.SIG_IGN
        assert signal.getsignal(signal.SIGCHLD) is signal.SIG_DFL
