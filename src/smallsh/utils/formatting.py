"""User-visible message text."""

from __future__ import annotations

from smallsh.core.models import ChildStatus, Exited

ENTER_FOREGROUND_ONLY = "Entering foreground-only mode (& is now ignored)"
EXIT_FOREGROUND_ONLY = "Exiting foreground-only mode"


def format_status(status: ChildStatus) -> str:
    """Format the last foreground status for the ``status`` built-in."""
    if isinstance(status, Exited):
        return f"Exit status {status.code}"
    return f"Terminated by signal {status.signal_number}"


def format_background_start(pid: int) -> str:
    return f"Background child PID {pid} is starting"


def format_background_done(pid: int, status: ChildStatus) -> str:
    """Format the notice for a reaped background job."""
    if isinstance(status, Exited):
        return f"Background child PID {pid} is done with exit status {status.code}"
    return f"Background child PID {pid} is terminated by signal {status.signal_number}"


def format_error(message: str) -> str:
    return f"smallsh: {message}"
