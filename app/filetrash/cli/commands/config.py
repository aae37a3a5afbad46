"""Trash configuration commands.

Provides commands to display the effective trash configuration and to
write a default configuration file.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from filetrash.core.paths import get_trash_config_path
from filetrash.trash.config import (
    TrashConfig,
    TrashConfigError,
    TrashConfigNotFoundError,
    get_default_config,
    load_trash_config,
    save_trash_config,
)
from filetrash.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize the trash configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Trash config file to read."),
    ] = None,
) -> None:
    """Show the effective trash configuration."""
    path = config_path or get_trash_config_path()
    try:
        config = load_trash_config(path)
        source = str(path)
    except TrashConfigNotFoundError:
        config = get_default_config()
        source = "built-in defaults"
    except TrashConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    _print_config(config, source)


@app.command()
def init(
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Where to write the config file."),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a default trash configuration file."""
    path = config_path or get_trash_config_path()

    if path.exists() and not force:
        print_info(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_trash_config(get_default_config(), path)
    except TrashConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")


def _print_config(config: TrashConfig, source: str) -> None:
    """Display config values as a Rich table."""
    table = Table(title="Trash Configuration", show_header=True, header_style="bold_header")
    table.add_column("Setting", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("empty_threshold", _describe(config.empty_threshold, "never"))
    table.add_row("max_miss_times", _describe(config.max_miss_times, "unlimited"))
    table.add_row("max_age_seconds", _describe(config.max_age_seconds, "unlimited"))
    table.add_row("sweep_interval_seconds", str(config.sweep_interval_seconds))

    console.print(table)
    console.print(f"[dim]Source: {source}[/dim]")


def _describe(value: float | None, disabled: str) -> str:
    """Render a policy value, naming the disabled state for 0/None."""
    if not value:
        return f"{value} ({disabled})" if value is not None else disabled
    return str(value)
