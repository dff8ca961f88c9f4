"""Unbuffered terminal output.

Everything the shell shows the user goes through ``os.write`` so that the
main loop and the signal handlers never share a Python-level buffer.
"""

from __future__ import annotations

import os
import sys

STDOUT_FD = 1
STDERR_FD = 2


def write_bytes(fd: int, data: bytes) -> None:
    """Write all of data to fd, looping over short writes."""
    view = memoryview(data)
    while view:
        written = os.write(fd, view)
        view = view[written:]


def write_line(fd: int, text: str) -> None:
    write_bytes(fd, text.encode(errors="surrogateescape") + b"\n")


def write_error(text: str) -> None:
    write_line(STDERR_FD, text)


def flush_std_streams() -> None:
    """Flush Python-level stdio buffers, e.g. before forking."""
    sys.stdout.flush()
    sys.stderr.flush()
