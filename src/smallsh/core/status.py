"""Last foreground command status."""

from __future__ import annotations

from smallsh.core.models import ChildStatus, Exited
from smallsh.utils.formatting import format_status


class StatusTracker:
    """Written by the dispatcher after a foreground wait, read by ``status``."""

    def __init__(self) -> None:
        self.last: ChildStatus = Exited(0)

    def record(self, status: ChildStatus) -> None:
        self.last = status

    def report(self) -> str:
        return format_status(self.last)
