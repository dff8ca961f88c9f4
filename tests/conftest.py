"""Shared test fixtures."""

from __future__ import annotations

import os
import signal

import pytest

from smallsh.config import AppConfig, LoggingConfig, ShellConfig
from smallsh.core.state import ShellState


@pytest.fixture
def app_config(tmp_path):
    """Create a test configuration."""
    return AppConfig(
        shell=ShellConfig(prompt=": "),
        logging=LoggingConfig(level="DEBUG", file=str(tmp_path / "test.log")),
    )


@pytest.fixture
def out_pipe():
    """A pipe standing in for the terminal. Yields (read_fd, write_fd)."""
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError:
            pass


@pytest.fixture
def shell_state(out_pipe):
    """Shell state whose messages land in out_pipe."""
    return ShellState(out_fd=out_pipe[1])


@pytest.fixture
def read_output(out_pipe):
    """Return a callable that closes the write end and drains out_pipe."""

    def _read() -> str:
        read_fd, write_fd = out_pipe
        os.close(write_fd)
        chunks = []
        while chunk := os.read(read_fd, 4096):
            chunks.append(chunk)
        return b"".join(chunks).decode()

    return _read


@pytest.fixture
def restore_signals():
    """Put signal handlers and the mask back after a test that changes them."""
    saved = {sig: signal.getsignal(sig) for sig in (signal.SIGINT, signal.SIGTSTP, signal.SIGCHLD)}
    mask = signal.pthread_sigmask(signal.SIG_BLOCK, [])
    yield
    for sig, handler in saved.items():
        signal.signal(sig, handler if handler is not None else signal.SIG_DFL)
    signal.pthread_sigmask(signal.SIG_SETMASK, mask)
