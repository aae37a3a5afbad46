"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from filetrash import __version__
from filetrash.cli.commands import config, delete, paths
from filetrash.core.logging import configure_logging

# Create main Typer app
app = typer.Typer(
    name="filetrash",
    help="Delete files and directories, retrying the ones that resist.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"filetrash version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every deletion attempt.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only log warnings and errors.",
        ),
    ] = False,
) -> None:
    """filetrash - deferred deletion of files and directories.

    Paths that cannot be removed right away are queued in a trash and
    retried until they are gone or give up.
    """
    configure_logging(verbose=verbose, quiet=quiet)


# Register commands
app.command(name="delete")(delete.delete)
app.command(name="find-paths")(paths.find_paths)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
