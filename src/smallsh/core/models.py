"""Data models for smallsh."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Union


@dataclass
class Command:
    """A parsed command line, ready to be dispatched."""

    program: str
    arguments: list[str] = field(default_factory=list)
    input_path: str | None = None
    output_path: str | None = None
    run_in_background: bool = False


@dataclass(frozen=True)
class Exited:
    """Child exited normally."""

    code: int = 0


@dataclass(frozen=True)
class Signaled:
    """Child was terminated by a signal."""

    signal_number: int


ChildStatus = Union[Exited, Signaled]


def status_from_wait(wait_status: int) -> ChildStatus:
    """Decode a raw ``waitpid`` status word."""
    if os.WIFSIGNALED(wait_status):
        return Signaled(os.WTERMSIG(wait_status))
    return Exited(os.WEXITSTATUS(wait_status))
