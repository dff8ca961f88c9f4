"""Turn a raw input line into a Command."""

from __future__ import annotations

import os

from smallsh.core.models import Command

MAX_LINE = 2048
MAX_ARGS = 512

PID_VARIABLE = "$$"


class ParseError(ValueError):
    """Input line could not be turned into a command."""


def expand(token: str, pid: int) -> str:
    """Replace every ``$$`` with the shell's pid."""
    return token.replace(PID_VARIABLE, str(pid))


def is_ignorable(line: str) -> bool:
    """Blank lines and comments produce no command at all."""
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def parse_line(line: str, pid: int | None = None) -> Command | None:
    """Parse one line of input.

    Returns None for blank and comment lines. ``<`` and ``>`` take the next
    word as a redirection target, and a trailing ``&`` requests background
    execution.
    """
    if is_ignorable(line):
        return None
    if len(line) > MAX_LINE:
        raise ParseError(f"line too long (max {MAX_LINE} characters)")

    if pid is None:
        pid = os.getpid()

    tokens = line.split()
    background = False
    if tokens[-1] == "&":
        background = True
        tokens.pop()

    arguments: list[str] = []
    input_path: str | None = None
    output_path: str | None = None

    words = iter(tokens)
    for token in words:
        if token in ("<", ">"):
            target = next(words, None)
            if target is None:
                raise ParseError(f"missing file name after '{token}'")
            if token == "<":
                input_path = expand(target, pid)
            else:
                output_path = expand(target, pid)
        else:
            arguments.append(expand(token, pid))

    if not arguments:
        raise ParseError("missing command")
    if len(arguments) > MAX_ARGS:
        raise ParseError(f"too many arguments (max {MAX_ARGS})")

    return Command(
        program=arguments[0],
        arguments=arguments,
        input_path=input_path,
        output_path=output_path,
        run_in_background=background,
    )
