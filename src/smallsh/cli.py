"""CLI entry point using typer."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from smallsh import __version__
from smallsh.config import (
    CONFIG_FILE,
    LOG_LEVELS,
    AppConfig,
    ensure_config_dir,
    load_config,
    save_config,
)

app = typer.Typer(
    name="smallsh",
    help="A small interactive shell with job control.",
    add_completion=False,
)
console = Console()


def setup_logging(config: AppConfig) -> None:
    """Send log records to the configured file; the terminal belongs to the shell."""
    log_path = Path(config.logging.file).expanduser().resolve()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.FileHandler(str(log_path), errors="backslashreplace")],
    )


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Start the shell when no subcommand is given."""
    if ctx.invoked_subcommand is None:
        run(log_level=None)


@app.command()
def run(
    log_level: str = typer.Option(None, "--log-level", "-l", help="Override the configured log level"),
) -> None:
    """Start the interactive shell."""
    config = load_config()
    if log_level is not None:
        if log_level.upper() not in LOG_LEVELS:
            console.print(f"[red]Unknown log level: {log_level}[/red]")
            raise typer.Exit(1)
        config.logging.level = log_level

    ensure_config_dir()
    setup_logging(config)

    from smallsh.frontend.repl import Shell

    code = Shell(config).run()
    raise typer.Exit(code)


@app.command()
def config(
    key: str = typer.Argument(None, help="Config key (e.g., shell.prompt)"),
    value: str = typer.Argument(None, help="New value"),
) -> None:
    """View or modify configuration."""
    cfg = load_config()

    if key is None:
        table = Table(title="Configuration")
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("shell.prompt", repr(cfg.shell.prompt))
        table.add_row("logging.level", cfg.logging.level)
        table.add_row("logging.file", cfg.logging.file)

        console.print(table)
        return

    if value is None:
        console.print("[red]Usage: smallsh config <key> <value>[/red]")
        raise typer.Exit(1)

    parts = key.split(".")
    if len(parts) != 2:
        console.print("[red]Key format: section.key (e.g., shell.prompt)[/red]")
        raise typer.Exit(1)

    section, attr = parts
    section_map = {"shell": cfg.shell, "logging": cfg.logging}

    if section not in section_map:
        console.print(f"[red]Unknown section: {section}[/red]")
        raise typer.Exit(1)

    obj = section_map[section]
    if not hasattr(obj, attr):
        console.print(f"[red]Unknown key: {key}[/red]")
        raise typer.Exit(1)

    if key == "logging.level":
        value = value.upper()
        if value not in LOG_LEVELS:
            console.print(f"[red]Invalid value for {key}: choose from {', '.join(LOG_LEVELS)}[/red]")
            raise typer.Exit(1)

    setattr(obj, attr, value)
    save_config(cfg)
    console.print(f"[green]{key} = {value!r}[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"smallsh v{__version__}")
    console.print(f"Python: {sys.version.split()[0]}")
    console.print(f"Config: {CONFIG_FILE}")


if __name__ == "__main__":
    app()
