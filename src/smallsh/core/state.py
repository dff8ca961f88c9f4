"""Process-wide shell state shared by the main loop and signal handlers."""

from __future__ import annotations

from dataclasses import dataclass, field

from smallsh.core.jobs import JobTable
from smallsh.core.status import StatusTracker
from smallsh.utils.terminal import STDOUT_FD


@dataclass
class ShellState:
    """Single source of truth for one interactive session.

    The SIGTSTP handler flips ``foreground_only`` and the SIGCHLD handler
    removes entries from ``jobs``; the dispatcher blocks SIGCHLD whenever it
    touches ``jobs`` or ``status`` itself.
    """

    foreground_only: bool = False
    running: bool = True
    status: StatusTracker = field(default_factory=StatusTracker)
    jobs: JobTable = field(default_factory=JobTable)
    out_fd: int = STDOUT_FD
