"""Interactive prompt loop."""

from __future__ import annotations

import io
import logging
import sys
from typing import TextIO

from smallsh.config import AppConfig
from smallsh.core.dispatcher import CommandDispatcher
from smallsh.core.launcher import ProcessLauncher
from smallsh.core.models import Command
from smallsh.core.reaper import ChildReaper
from smallsh.core.signals import SignalController
from smallsh.core.state import ShellState
from smallsh.frontend.parser import ParseError, parse_line
from smallsh.utils.formatting import format_error
from smallsh.utils.terminal import write_bytes, write_error

logger = logging.getLogger(__name__)


class Shell:
    """Wire the job-control engine to a prompt and an input stream."""

    def __init__(
        self,
        config: AppConfig,
        stdin: TextIO | None = None,
        state: ShellState | None = None,
    ) -> None:
        self.config = config
        if stdin is None:
            stdin = sys.stdin
            if isinstance(stdin, io.TextIOWrapper):
                # Undecodable bytes reach execvp unchanged
                stdin.reconfigure(errors="surrogateescape")
        self.stdin = stdin
        self.state = state or ShellState()
        self.signals = SignalController(self.state)
        self.reaper = ChildReaper(self.state)
        self.dispatcher = CommandDispatcher(self.state, ProcessLauncher())

    def read_line(self) -> str | None:
        """Show the prompt and read one line. Returns None at end of input."""
        write_bytes(self.state.out_fd, self.config.shell.prompt.encode(errors="surrogateescape"))
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\n")

    def run(self) -> int:
        """Run until ``exit`` or end of input. Returns the shell's exit status."""
        self.signals.install(self.reaper)
        logger.info("Shell started")
        try:
            while self.state.running:
                line = self.read_line()
                if line is None:
                    # End of input behaves like the exit built-in
                    self.dispatcher.dispatch(Command(program="exit", arguments=["exit"]))
                    break

                try:
                    command = parse_line(line)
                except ParseError as e:
                    write_error(format_error(str(e)))
                    continue

                self.dispatcher.dispatch(command)
        finally:
            self.signals.restore()
            logger.info("Shell stopped")
        return 0
