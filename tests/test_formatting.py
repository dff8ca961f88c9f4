"""Tests for message formatting utilities."""

from __future__ import annotations

import os
from unittest.mock import patch

from smallsh.core.models import Exited, Signaled, status_from_wait
from smallsh.utils.formatting import (
    format_background_done,
    format_background_start,
    format_error,
    format_status,
)
from smallsh.utils.terminal import write_bytes, write_line


class TestFormatStatus:
    def test_exit_status(self):
        assert format_status(Exited(0)) == "Exit status 0"
        assert format_status(Exited(1)) == "Exit status 1"

    def test_signal(self):
        assert format_status(Signaled(15)) == "Terminated by signal 15"


class TestBackgroundMessages:
    def test_start(self):
        assert format_background_start(4242) == "Background child PID 4242 is starting"

    def test_done(self):
        message = format_background_done(4242, Exited(0))
        assert message == "Background child PID 4242 is done with exit status 0"

    def test_killed(self):
        message = format_background_done(4242, Signaled(15))
        assert message == "Background child PID 4242 is terminated by signal 15"

    def test_error_prefix(self):
        assert format_error("cd: /nope: No such file or directory").startswith("smallsh: ")


class TestStatusFromWait:
    def test_exit_code(self):
        assert status_from_wait(3 << 8) == Exited(3)

    def test_clean_exit(self):
        assert status_from_wait(0) == Exited(0)

    def test_signal(self):
        assert status_from_wait(9) == Signaled(9)


class TestTerminalWrites:
    def test_write_line_appends_newline(self, out_pipe, read_output):
        write_line(out_pipe[1], "hello")
        assert read_output() == "hello\n"

    def test_write_bytes_handles_short_writes(self, out_pipe, read_output):
        real_write = os.write
        calls = []

        def one_byte_at_a_time(fd, data):
            calls.append(bytes(data))
            return real_write(fd, bytes(data[:1]))

        with patch("smallsh.utils.terminal.os.write", side_effect=one_byte_at_a_time):
            write_bytes(out_pipe[1], b"abc")
        assert read_output() == "abc"
        assert len(calls) == 3

    def test_write_line_passes_undecodable_bytes_through(self, out_pipe):
        write_line(out_pipe[1], b"cd: \xff".decode(errors="surrogateescape"))
        os.close(out_pipe[1])
        assert os.read(out_pipe[0], 100) == b"cd: \xff\n"
