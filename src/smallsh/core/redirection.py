"""Rebind a child's standard input or output to a file."""

from __future__ import annotations

import enum
import os

OUTPUT_MODE = 0o644

# Child exit codes for failed redirection
OPEN_FAILURE = 1
DUP_FAILURE = 2


class Stream(enum.IntEnum):
    """Standard stream, valued by its well-known descriptor."""

    INPUT = 0
    OUTPUT = 1


class RedirectionError(OSError):
    """Redirection failed; the child must exit with ``exit_code``."""

    def __init__(self, message: str, exit_code: int) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def redirect(path: str, stream: Stream) -> None:
    """Open path and make it the process's stdin or stdout.

    Only ever called in a forked child: the caller turns RedirectionError
    into ``os._exit(exc.exit_code)``.
    """
    if stream is Stream.INPUT:
        flags, mode, verb = os.O_RDONLY, 0, "input"
    else:
        flags, mode, verb = os.O_WRONLY | os.O_CREAT | os.O_TRUNC, OUTPUT_MODE, "output"

    try:
        fd = os.open(path, flags, mode)
    except OSError as e:
        raise RedirectionError(f"cannot open {path} for {verb}: {e.strerror}", OPEN_FAILURE) from e

    try:
        if fd != stream:
            os.dup2(fd, stream)
    except OSError as e:
        raise RedirectionError(f"cannot redirect {verb} to {path}: {e.strerror}", DUP_FAILURE) from e
    finally:
        if fd != stream:
            os.close(fd)
