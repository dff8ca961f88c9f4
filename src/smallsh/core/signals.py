"""Signal dispositions for the shell and its children."""

from __future__ import annotations

import logging
import os
import signal
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from smallsh.core.state import ShellState
from smallsh.utils.formatting import ENTER_FOREGROUND_ONLY, EXIT_FOREGROUND_ONLY

logger = logging.getLogger(__name__)

Handler = Callable[[int, Any], None]

_ENTER_MSG = (ENTER_FOREGROUND_ONLY + "\n").encode()
_EXIT_MSG = (EXIT_FOREGROUND_ONLY + "\n").encode()

_SHELL_SIGNALS = (signal.SIGINT, signal.SIGTSTP, signal.SIGCHLD)


@contextmanager
def child_signals_blocked() -> Iterator[None]:
    """Hold SIGCHLD delivery for the duration of the block.

    A SIGCHLD raised meanwhile stays pending and runs the reaper as soon as
    the previous mask is restored.
    """
    previous = signal.pthread_sigmask(signal.SIG_BLOCK, {signal.SIGCHLD})
    try:
        yield
    finally:
        signal.pthread_sigmask(signal.SIG_SETMASK, previous)


def apply_child_dispositions(background: bool) -> None:
    """Set up a freshly forked child's signals before exec."""
    signal.signal(signal.SIGINT, signal.SIG_IGN if background else signal.SIG_DFL)
    signal.signal(signal.SIGTSTP, signal.SIG_IGN)
    signal.signal(signal.SIGCHLD, signal.SIG_DFL)
    # The blocked mask survives exec
    signal.pthread_sigmask(signal.SIG_UNBLOCK, {signal.SIGCHLD})


class SignalController:
    """Installs the shell's handlers and owns the foreground-only toggle."""

    def __init__(self, state: ShellState) -> None:
        self.state = state
        self._saved: dict[int, Any] = {}

    def install(self, reaper: Handler) -> None:
        """Install the shell-process dispositions."""
        for sig in _SHELL_SIGNALS:
            self._saved.setdefault(sig, signal.getsignal(sig))

        signal.signal(signal.SIGINT, signal.SIG_IGN)
        signal.signal(signal.SIGTSTP, self.handle_stop_request)
        # No SA_RESTART: a blocking prompt read must return to the interpreter
        # so the reaper runs while the user is idle
        signal.signal(signal.SIGCHLD, reaper)
        logger.debug("Shell signal handlers installed")

    def restore(self) -> None:
        """Put back whatever dispositions were active before install()."""
        for sig, handler in self._saved.items():
            signal.signal(sig, handler if handler is not None else signal.SIG_DFL)
        self._saved.clear()
        logger.debug("Shell signal handlers restored")

    def handle_stop_request(self, signum: int, frame: Any) -> None:
        """SIGTSTP: flip foreground-only mode and announce it."""
        if self.state.foreground_only:
            message = _EXIT_MSG
        else:
            message = _ENTER_MSG
        self.state.foreground_only = not self.state.foreground_only
        os.write(self.state.out_fd, message)
