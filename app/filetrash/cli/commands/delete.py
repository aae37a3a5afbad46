"""Delete command with deferred retries.

Provides the `filetrash delete` command, which deletes paths through a
DeletionTrash and keeps sweeping the paths that could not be removed
right away.
"""

import os
import time
from pathlib import Path
from typing import Annotated

import typer

from filetrash.trash.config import (
    TrashConfig,
    TrashConfigError,
    TrashConfigNotFoundError,
    load_trash_config,
)
from filetrash.trash.models import DeleteResult
from filetrash.trash.trash import DeletionTrash
from filetrash.utils.formatting import (
    console,
    create_result_table,
    format_result,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def delete(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Paths to delete."),
    ],
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Delete directories with their contents."),
    ] = False,
    retries: Annotated[
        int,
        typer.Option("--retries", min=0, help="Sweeps to run while paths remain queued."),
    ] = 3,
    interval: Annotated[
        float | None,
        typer.Option(
            "--interval",
            min=0.0,
            help="Seconds to wait between sweeps (default: sweep_interval_seconds).",
        ),
    ] = None,
    max_miss_times: Annotated[
        int | None,
        typer.Option("--max-miss-times", min=0, help="Failed attempts before giving up."),
    ] = None,
    max_age: Annotated[
        float | None,
        typer.Option("--max-age", help="Seconds a path may stay queued."),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Trash config file to use."),
    ] = None,
) -> None:
    """Delete paths, retrying the ones that cannot be removed right away.

    Paths that fail (locked files, non-empty directories) are queued and
    retried on each sweep until they are deleted, expire, or the retries
    run out.

    Examples:
        filetrash delete build.log
        filetrash delete -r ./cache --retries 10 --interval 0.5
    """
    config = _resolve_config(config_path, max_miss_times=max_miss_times, max_age=max_age)
    trash = DeletionTrash.from_config(config)
    if interval is None:
        interval = config.sweep_interval_seconds

    for path in paths:
        result = trash.delete_tree(path) if recursive else trash.delete(path)
        if result is DeleteResult.FAILED:
            print_warning(f"Giving up on {path}")

    sweeps = 0
    while trash.size() and sweeps < retries:
        sweeps += 1
        time.sleep(interval)
        trash.sweep()
        trash.evict_expired()

    outcomes = {path: _final_result(trash, path) for path in paths}
    _print_outcomes(outcomes)

    remaining = trash.size()
    if remaining:
        print_warning(f"{remaining} path(s) still queued after {sweeps} sweep(s).")

    if all(r is DeleteResult.DELETED for r in outcomes.values()) and not remaining:
        print_success(f"Deleted {len(outcomes)} path(s).")
        return

    raise typer.Exit(code=1)


# === Private helper functions ===


def _resolve_config(
    config_path: Path | None,
    *,
    max_miss_times: int | None,
    max_age: float | None,
) -> TrashConfig:
    """Load the trash config and apply command-line overrides.

    A missing default config falls back to built-in defaults; a missing
    explicit --config file is an error.
    """
    try:
        config = load_trash_config(config_path)
    except TrashConfigNotFoundError as e:
        if config_path is not None:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        config = TrashConfig()
    except TrashConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    overrides: dict[str, object] = {}
    if max_miss_times is not None:
        overrides["max_miss_times"] = max_miss_times
    if max_age is not None:
        overrides["max_age_seconds"] = max_age
    if not overrides:
        return config

    try:
        return TrashConfig.model_validate({**config.model_dump(), **overrides})
    except ValueError as e:
        print_error(f"Invalid option: {e}")
        raise typer.Exit(code=1) from e


def _final_result(trash: DeletionTrash, path: Path) -> DeleteResult:
    """Classify a requested path after all sweeps have run."""
    if path in trash:
        return DeleteResult.QUEUED
    if os.path.lexists(path):
        return DeleteResult.FAILED
    return DeleteResult.DELETED


def _print_outcomes(outcomes: dict[Path, DeleteResult]) -> None:
    """Display final outcomes as a Rich table."""
    if not outcomes:
        print_info("Nothing to delete.")
        return

    table = create_result_table()
    for path, result in outcomes.items():
        table.add_row(str(path), format_result(result))
    console.print(table)
