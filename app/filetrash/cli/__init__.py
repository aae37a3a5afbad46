"""CLI package for filetrash.

This package contains the Typer application and all subcommands.
"""

from filetrash.cli.main import app

__all__ = ["app"]
