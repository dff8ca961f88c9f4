"""Fork and exec external programs."""

from __future__ import annotations

import logging
import os
from typing import NoReturn

from smallsh.core.models import Command
from smallsh.core.redirection import RedirectionError, Stream, redirect
from smallsh.core.signals import apply_child_dispositions
from smallsh.utils.formatting import format_error
from smallsh.utils.terminal import flush_std_streams, write_error

logger = logging.getLogger(__name__)

# Child exit code when the program cannot be executed
EXEC_FAILURE = 1


class ProcessLauncher:
    """Create one child process per external command."""

    def launch(self, command: Command, background: bool) -> int | None:
        """Fork a child running command. Returns its pid, or None if fork failed.

        The parent never waits here; that is the dispatcher's job.
        """
        flush_std_streams()
        try:
            pid = os.fork()
        except OSError as e:
            logger.error("fork failed for %s: %s", command.program, e)
            write_error(format_error(f"fork failed: {e.strerror or e}"))
            return None

        if pid == 0:
            self._run_child(command, background)

        logger.debug("Started pid %d: %s (background=%s)", pid, command.arguments, background)
        return pid

    def _run_child(self, command: Command, background: bool) -> NoReturn:
        """Configure the forked child and exec the program. Never returns."""
        code = EXEC_FAILURE
        try:
            if background:
                # Background jobs must never read from or write to the terminal
                if command.input_path is None:
                    redirect(os.devnull, Stream.INPUT)
                if command.output_path is None:
                    redirect(os.devnull, Stream.OUTPUT)
            if command.input_path is not None:
                redirect(command.input_path, Stream.INPUT)
            if command.output_path is not None:
                redirect(command.output_path, Stream.OUTPUT)

            apply_child_dispositions(background)
            os.execvp(command.program, command.arguments)
        except RedirectionError as e:
            write_error(format_error(str(e)))
            code = e.exit_code
        except OSError as e:
            write_error(f"{command.program}: {e.strerror or e}")
        finally:
            os._exit(code)
