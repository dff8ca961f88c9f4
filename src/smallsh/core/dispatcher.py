"""Command dispatch: built-ins in-process, everything else via fork/exec."""

from __future__ import annotations

import logging
import os
import signal
from collections.abc import Callable

from smallsh.core.launcher import ProcessLauncher
from smallsh.core.models import Command, Signaled, status_from_wait
from smallsh.core.signals import child_signals_blocked
from smallsh.core.state import ShellState
from smallsh.utils.formatting import format_background_start, format_error, format_status
from smallsh.utils.terminal import write_error, write_line

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Execute each parsed command exactly once."""

    def __init__(self, state: ShellState, launcher: ProcessLauncher | None = None) -> None:
        self.state = state
        self.launcher = launcher or ProcessLauncher()
        self.builtins: dict[str, Callable[[Command], None]] = {
            "exit": self.builtin_exit,
            "cd": self.builtin_cd,
            "status": self.builtin_status,
        }

    def dispatch(self, command: Command | None) -> None:
        """Run a built-in or launch an external program."""
        if command is None or not command.arguments:
            return

        builtin = self.builtins.get(command.program)
        if builtin is not None:
            logger.debug("Built-in: %s", command.arguments)
            builtin(command)
            return

        self.run_external(command)

    def run_external(self, command: Command) -> None:
        """Launch an external program, then wait for it or register it as a job."""
        background = command.run_in_background and not self.state.foreground_only

        # SIGCHLD stays blocked until the child is either reaped here or
        # registered as a job, so the reaper never races us for it.
        with child_signals_blocked():
            pid = self.launcher.launch(command, background)
            if pid is None:
                return
            if background:
                self.state.jobs.insert(pid)
                write_line(self.state.out_fd, format_background_start(pid))
            else:
                self._wait_foreground(pid)

    def _wait_foreground(self, pid: int) -> None:
        try:
            _, wait_status = os.waitpid(pid, 0)
        except ChildProcessError:
            logger.warning("Foreground child %d was already reaped", pid)
            return

        status = status_from_wait(wait_status)
        self.state.status.record(status)
        logger.debug("Foreground child %d finished: %s", pid, status)
        if isinstance(status, Signaled):
            write_line(self.state.out_fd, format_status(status))

    def builtin_exit(self, command: Command) -> None:
        """Terminate every tracked job and stop the prompt loop."""
        with child_signals_blocked():
            for pid in self.state.jobs:
                try:
                    os.kill(pid, signal.SIGTERM)
                except ProcessLookupError:
                    pass
                logger.info("Sent SIGTERM to background job %d", pid)
            self.state.jobs.clear()
        self.state.running = False

    def builtin_cd(self, command: Command) -> None:
        """Change directory; bare ``cd`` goes to $HOME."""
        if len(command.arguments) == 1:
            target = os.environ.get("HOME")
            if target is None:
                write_error(format_error("cd: HOME not set"))
                return
        else:
            target = command.arguments[1]
            if len(command.arguments) > 2:
                logger.debug("cd: ignoring extra arguments %s", command.arguments[2:])

        try:
            os.chdir(target)
        except OSError as e:
            logger.info("cd to %s failed: %s", target, e)
            write_error(format_error(f"cd: {target}: {e.strerror or e}"))

    def builtin_status(self, command: Command) -> None:
        """Print the last foreground status."""
        write_line(self.state.out_fd, self.state.status.report())
