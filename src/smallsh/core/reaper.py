"""SIGCHLD handler that reaps finished children."""

from __future__ import annotations

import os
from typing import Any

from smallsh.core.models import status_from_wait
from smallsh.core.state import ShellState
from smallsh.utils.formatting import format_background_done
from smallsh.utils.terminal import write_line


class ChildReaper:
    """Callable installed as the SIGCHLD handler.

    Only background jobs are reported here. A foreground child is always
    reaped by the dispatcher while SIGCHLD is blocked, so anything untracked
    that shows up is dropped without touching the last foreground status.
    """

    def __init__(self, state: ShellState) -> None:
        self.state = state

    def __call__(self, signum: int, frame: Any) -> None:
        # Several exits can collapse into one SIGCHLD, so drain them all
        while True:
            try:
                pid, wait_status = os.waitpid(-1, os.WNOHANG)
            except ChildProcessError:
                return
            if pid == 0:
                return
            if self.state.jobs.remove(pid):
                status = status_from_wait(wait_status)
                write_line(self.state.out_fd, format_background_done(pid, status))
