"""Allow running as ``python -m smallsh``."""

from smallsh.cli import app

app()
