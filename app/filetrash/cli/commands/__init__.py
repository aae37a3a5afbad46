"""CLI commands for filetrash.

This package contains all subcommand implementations.
"""

from filetrash.cli.commands import config, delete, paths

__all__ = ["config", "delete", "paths"]
