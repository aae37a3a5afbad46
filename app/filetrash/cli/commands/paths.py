"""Path extraction command.

Provides the `filetrash find-paths` command, which prints the tokens of
a text that look like filesystem paths.
"""

import sys
from typing import Annotated

import typer

from filetrash.trash.finder import paths_in_text


def find_paths(
    text: Annotated[
        str | None,
        typer.Argument(help="Text to scan. Read from stdin when omitted."),
    ] = None,
    platform: Annotated[
        str | None,
        typer.Option(
            "--platform",
            "-p",
            help="Path syntax to match (e.g. linux, darwin, win32).",
        ),
    ] = None,
) -> None:
    """Print the paths found in a text, one per line.

    Examples:
        filetrash find-paths "No files found in: /var/log/app"
        some-tool 2>&1 | filetrash find-paths
    """
    source = text if text is not None else sys.stdin.read()

    found: list[str] = []
    for line in source.splitlines():
        found.extend(paths_in_text(line, platform=platform))

    for path in found:
        typer.echo(path)

    if not found:
        raise typer.Exit(code=1)
